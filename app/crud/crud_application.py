from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, Filter
from app.models.application import Application
from app.models.document import Document


class CRUDApplication(CRUDBase[Application]):
    def get_by_application_id(self, db: Session, application_id: str) -> Optional[Application]:
        return self.get_by(db, Filter("application_id", "eq", application_id))

    def get_for_user(self, db: Session, user_id: int) -> List[Application]:
        return self.query(db, [Filter("user_id", "eq", user_id)], order_by="created_at", descending=True)


class CRUDDocument(CRUDBase[Document]):
    def get_for_application(self, db: Session, application_id: int) -> List[Document]:
        return self.query(db, [Filter("application_id", "eq", application_id)], order_by="id")

    def get_uploaded_types(self, db: Session, application_id: int) -> List[str]:
        return sorted({d.document_type for d in self.get_for_application(db, application_id)})

    def count_for_application(self, db: Session, application_id: int, *extra: Filter) -> int:
        return self.count(db, [Filter("application_id", "eq", application_id), *extra])


application = CRUDApplication(Application)
document = CRUDDocument(Document)
