from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, Filter
from app.models.user import User

class CRUDUser(CRUDBase[User]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return self.get_by(db, Filter("email", "eq", email))

user = CRUDUser(User)
