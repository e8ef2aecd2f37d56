from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from resource_registry.database import models
from resource_registry.repositories.interfaces import IRoleRepository

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, role_model: models.Role) -> models.Role:
        self.db.add(role_model)
        self.db.flush()
        return role_model

    def find_by_id(self, role_id: str) -> Optional[models.Role]:
        return self.db.query(models.Role).filter(models.Role.id == role_id).first()

    def find_by_name(self, name: str) -> Optional[models.Role]:
        return self.db.query(models.Role).filter(models.Role.name == name).first()

    def update(self, role: models.Role) -> models.Role:
        self.db.flush()
        return role

    def delete(self, role: models.Role) -> bool:
        if role:
            self.db.delete(role)
            self.db.flush()
            return True
        return False

    def count(self, name=None, full_access=None, self_obtainable=None) -> int:
        return self._filtered(name, full_access, self_obtainable).count()

    def find_many(self, name=None, full_access=None, self_obtainable=None, skip=0, limit=20) -> List[models.Role]:
        return (
            self._filtered(name, full_access, self_obtainable)
            .order_by(models.Role.name.asc(), models.Role.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _filtered(self, name, full_access, self_obtainable):
        query = self.db.query(models.Role)
        if name:
            query = query.filter(func.lower(models.Role.name).contains(name.lower(), autoescape=True))
        if full_access is not None:
            query = query.filter(models.Role.full_access == full_access)
        if self_obtainable is not None:
            query = query.filter(models.Role.self_obtainable == self_obtainable)
        return query
