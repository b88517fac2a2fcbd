from app.models.user import User
from app.models.program import University, Program
from app.models.application import Application
from app.models.document import Document, RequiredDocument
from app.models.payment import Payment
from app.models.support_ticket import SupportTicket
