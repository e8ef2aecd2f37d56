from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from resource_registry.database import models
from resource_registry.repositories.interfaces import IPhaseRepository

class SqlalchemyPhaseRepository(IPhaseRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, phase_model: models.Phase) -> models.Phase:
        self.db.add(phase_model)
        self.db.flush()
        return phase_model

    def find_by_id(self, phase_id: str) -> Optional[models.Phase]:
        return self.db.query(models.Phase).filter(models.Phase.id == phase_id).first()

    def find_by_ids(self, phase_ids: Iterable[str]) -> List[models.Phase]:
        phase_ids = list(phase_ids)
        if not phase_ids:
            return []
        return self.db.query(models.Phase).filter(models.Phase.id.in_(phase_ids)).all()

    def find_by_name(self, name: str) -> Optional[models.Phase]:
        return self.db.query(models.Phase).filter(models.Phase.name == name).first()

    def update(self, phase: models.Phase) -> models.Phase:
        self.db.flush()
        return phase

    def delete(self, phase: models.Phase) -> bool:
        if phase:
            self.db.delete(phase)
            self.db.flush()
            return True
        return False

    def count(self, name=None) -> int:
        return self._filtered(name).count()

    def find_many(self, name=None, skip=0, limit=20) -> List[models.Phase]:
        return (
            self._filtered(name)
            .order_by(models.Phase.name.asc(), models.Phase.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _filtered(self, name):
        query = self.db.query(models.Phase)
        if name:
            query = query.filter(func.lower(models.Phase.name).contains(name.lower(), autoescape=True))
        return query
