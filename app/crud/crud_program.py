from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, Filter
from app.models.program import Program, University
from app.models.document import RequiredDocument


class CRUDUniversity(CRUDBase[University]):
    def get_by_code(self, db: Session, code: str) -> Optional[University]:
        return self.get_by(db, Filter("code", "eq", code))


class CRUDProgram(CRUDBase[Program]):
    def get_by_code(self, db: Session, university_id: int, code: str) -> Optional[Program]:
        return self.get_by(db, Filter("university_id", "eq", university_id), Filter("code", "eq", code))


class CRUDRequiredDocument(CRUDBase[RequiredDocument]):
    def get_for_program(self, db: Session, program_id: int) -> List[RequiredDocument]:
        return self.query(db, [Filter("program_id", "eq", program_id)], order_by="document_type")

    def get_required_types(self, db: Session, program_id: int) -> List[str]:
        entries = self.query(
            db,
            [Filter("program_id", "eq", program_id), Filter("is_required", "eq", True)],
            order_by="document_type",
        )
        return [entry.document_type for entry in entries]

    def get_entry(self, db: Session, program_id: int, document_type: str) -> Optional[RequiredDocument]:
        return self.get_by(db, Filter("program_id", "eq", program_id), Filter("document_type", "eq", document_type))


university = CRUDUniversity(University)
program = CRUDProgram(Program)
required_document = CRUDRequiredDocument(RequiredDocument)
