from app.crud.base import CRUDBase
from app.models.support_ticket import SupportTicket


class CRUDSupportTicket(CRUDBase[SupportTicket]):
    pass


support_ticket = CRUDSupportTicket(SupportTicket)
