from app.crud.base import Filter
from app.crud.crud_user import user
from app.crud.crud_program import university, program, required_document
from app.crud.crud_application import application, document
from app.crud.crud_payment import payment
from app.crud.crud_support import support_ticket
