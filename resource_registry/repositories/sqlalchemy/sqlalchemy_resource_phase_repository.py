from typing import Iterable, List, Optional
from sqlalchemy.orm import Session, contains_eager
from resource_registry.database import models
from resource_registry.repositories.interfaces import IResourcePhaseRepository

class SqlalchemyResourcePhaseRepository(IResourcePhaseRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create_many(self, resource_phases: List[models.ResourcePhase]) -> List[models.ResourcePhase]:
        self.db.add_all(resource_phases)
        self.db.flush()
        return resource_phases

    def list_by_resource_id(self, resource_id: str) -> List[models.ResourcePhase]:
        return (
            self.db.query(models.ResourcePhase)
            .join(models.ResourcePhase.phase)
            .options(contains_eager(models.ResourcePhase.phase))
            .filter(models.ResourcePhase.resource_id == resource_id)
            .order_by(models.Phase.name.asc())
            .all()
        )

    def find_by_resource_and_phase(self, resource_id: str, phase_id: str) -> Optional[models.ResourcePhase]:
        return self.db.query(models.ResourcePhase).filter(
            models.ResourcePhase.resource_id == resource_id,
            models.ResourcePhase.phase_id == phase_id
        ).first()

    def find_by_resource_and_phases(self, resource_id: str, phase_ids: Iterable[str]) -> List[models.ResourcePhase]:
        phase_ids = list(phase_ids)
        if not phase_ids:
            return []
        return self.db.query(models.ResourcePhase).filter(
            models.ResourcePhase.resource_id == resource_id,
            models.ResourcePhase.phase_id.in_(phase_ids)
        ).all()

    def count_by_phase_id(self, phase_id: str) -> int:
        return self.db.query(models.ResourcePhase).filter(models.ResourcePhase.phase_id == phase_id).count()

    def delete(self, resource_phase: models.ResourcePhase) -> bool:
        if resource_phase:
            self.db.delete(resource_phase)
            self.db.flush()
            return True
        return False

    def delete_by_resource_id(self, resource_id: str) -> int:
        # 같은 (resource_id, phase_id)를 다시 추가할 수 있도록 즉시 DELETE를 실행합니다.
        return self.db.query(models.ResourcePhase).filter(
            models.ResourcePhase.resource_id == resource_id
        ).delete(synchronize_session="fetch")
