from typing import List, Optional
from sqlalchemy.orm import Session
from resource_registry.database import models
from resource_registry.repositories.interfaces import IRolePhaseDependencyRepository

class SqlalchemyRolePhaseDependencyRepository(IRolePhaseDependencyRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, dependency_model: models.RolePhaseDependency) -> models.RolePhaseDependency:
        self.db.add(dependency_model)
        self.db.flush()
        return dependency_model

    def find_by_id(self, dependency_id: str) -> Optional[models.RolePhaseDependency]:
        return self.db.query(models.RolePhaseDependency).filter(
            models.RolePhaseDependency.id == dependency_id
        ).first()

    def find_by_role_and_phase(self, role_id: str, phase_id: str) -> Optional[models.RolePhaseDependency]:
        return self.db.query(models.RolePhaseDependency).filter(
            models.RolePhaseDependency.role_id == role_id,
            models.RolePhaseDependency.phase_id == phase_id
        ).first()

    def list_phase_ids_by_role_id(self, role_id: str) -> List[str]:
        rows = self.db.query(models.RolePhaseDependency.phase_id).filter(
            models.RolePhaseDependency.role_id == role_id
        ).all()
        return [row[0] for row in rows]

    def delete(self, dependency: models.RolePhaseDependency) -> bool:
        if dependency:
            self.db.delete(dependency)
            self.db.flush()
            return True
        return False

    def count(self, role_id=None, phase_id=None, phase_type=None) -> int:
        return self._filtered(role_id, phase_id, phase_type).count()

    def find_many(self, role_id=None, phase_id=None, phase_type=None, skip=0, limit=20) -> List[models.RolePhaseDependency]:
        return (
            self._filtered(role_id, phase_id, phase_type)
            .order_by(models.RolePhaseDependency.created.asc(), models.RolePhaseDependency.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _filtered(self, role_id, phase_id, phase_type):
        query = self.db.query(models.RolePhaseDependency)
        if role_id:
            query = query.filter(models.RolePhaseDependency.role_id == role_id)
        if phase_id:
            query = query.filter(models.RolePhaseDependency.phase_id == phase_id)
        if phase_type:
            query = query.filter(models.RolePhaseDependency.phase_type == phase_type)
        return query
