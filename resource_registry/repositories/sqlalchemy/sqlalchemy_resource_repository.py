from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from resource_registry.database import models
from resource_registry.repositories.interfaces import IResourceRepository

class SqlalchemyResourceRepository(IResourceRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, resource_model: models.Resource) -> models.Resource:
        self.db.add(resource_model)
        self.db.flush()
        return resource_model

    def find_by_id(self, resource_id: str, include_role: bool = False,
                   include_phases: bool = False) -> Optional[models.Resource]:
        query = self._with_includes(self.db.query(models.Resource), include_role, include_phases)
        return query.filter(models.Resource.id == resource_id).first()

    def find_by_assignment(self, role_id: str, challenge_id: Optional[str], member_id: Optional[str],
                           exclude_id: Optional[str] = None) -> Optional[models.Resource]:
        query = self.db.query(models.Resource).filter(
            models.Resource.role_id == role_id,
            models.Resource.challenge_key == (challenge_id or ""),
            models.Resource.member_key == (member_id or ""),
        )
        if exclude_id:
            query = query.filter(models.Resource.id != exclude_id)
        return query.first()

    def count_by_role_id(self, role_id: str) -> int:
        return self.db.query(models.Resource).filter(models.Resource.role_id == role_id).count()

    def update(self, resource: models.Resource) -> models.Resource:
        self.db.flush()
        return resource

    def delete(self, resource: models.Resource) -> bool:
        if resource:
            self.db.delete(resource)
            self.db.flush()
            return True
        return False

    def count(self, challenge_id=None, member_id=None, member_handle=None, role_id=None, legacy_id=None) -> int:
        return self._filtered(challenge_id, member_id, member_handle, role_id, legacy_id).count()

    def find_many(self, challenge_id=None, member_id=None, member_handle=None, role_id=None, legacy_id=None,
                  skip=0, limit=20, include_role=False, include_phases=False) -> List[models.Resource]:
        query = self._filtered(challenge_id, member_id, member_handle, role_id, legacy_id)
        query = self._with_includes(query, include_role, include_phases)
        return (
            query.order_by(models.Resource.created.desc(), models.Resource.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _filtered(self, challenge_id, member_id, member_handle, role_id, legacy_id):
        query = self.db.query(models.Resource)
        if challenge_id:
            query = query.filter(models.Resource.challenge_id == challenge_id)
        if member_id:
            query = query.filter(models.Resource.member_id == member_id)
        if member_handle:
            query = query.filter(
                func.lower(models.Resource.member_handle).contains(member_handle.lower(), autoescape=True)
            )
        if role_id:
            query = query.filter(models.Resource.role_id == role_id)
        if legacy_id:
            query = query.filter(models.Resource.legacy_id == legacy_id)
        return query

    def _with_includes(self, query, include_role, include_phases):
        if include_role:
            query = query.options(joinedload(models.Resource.role))
        if include_phases:
            query = query.options(
                joinedload(models.Resource.resource_phases).joinedload(models.ResourcePhase.phase)
            )
        return query
