from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, Filter
from app.models.payment import Payment


class CRUDPayment(CRUDBase[Payment]):
    def get_by_payment_id(self, db: Session, payment_id: str) -> Optional[Payment]:
        return self.get_by(db, Filter("payment_id", "eq", payment_id))

    def get_completed(self, db: Session, application_id: int, payment_type: str) -> Optional[Payment]:
        return self.get_by(
            db,
            Filter("application_id", "eq", application_id),
            Filter("payment_type", "eq", payment_type),
            Filter("status", "eq", "completed"),
        )


payment = CRUDPayment(Payment)
