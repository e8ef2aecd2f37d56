import logging
from typing import Any, Callable, Dict, Optional

from resource_registry.database import models
from resource_registry.repositories.interfaces import (
    IPhaseRepository, IRolePhaseDependencyRepository, IRoleRepository, IUnitOfWork
)
from resource_registry.services.exceptions import conflict, not_found
from resource_registry.services.schemas import RolePhaseDependencyCreate, RolePhaseDependencySearch, parse
from resource_registry.services.serializers import dependency_to_dict
from resource_registry.utils.ids import generate_id
from resource_registry.utils.pagination import page_window, paged_result
from resource_registry.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


class RolePhaseDependencyService:
    """
    역할별 허용 단계 목록(RolePhaseDependency)을 관리합니다.
    ResourcePhaseService.ensure_role_eligibility가 이 목록을 참조합니다.
    """

    def __init__(self, dependency_repo: IRolePhaseDependencyRepository, role_repo: IRoleRepository,
                 phase_repo: IPhaseRepository, uow: IUnitOfWork, id_generator: Callable[[], str] = generate_id):
        self.dependency_repo = dependency_repo
        self.role_repo = role_repo
        self.phase_repo = phase_repo
        self.uow = uow
        self.id_generator = id_generator

    def get_dependency(self, dependency_id: str) -> Dict[str, Any]:
        """
        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 허용 기록을 찾을 수 없을 때.
        """
        dependency = self.dependency_repo.find_by_id(dependency_id)
        if not dependency:
            raise not_found(f"Role phase dependency with id '{dependency_id}' not found.")
        return dependency_to_dict(dependency)

    def create_dependency(self, dependency: Dict[str, Any]) -> Dict[str, Any]:
        """
        역할이 특정 단계에 연결될 수 있도록 허용 기록을 추가합니다.

        Raises:
            ServiceError(VALIDATION): roleId, phaseId, createdBy가 없을 때.
            ServiceError(NOT_FOUND): 역할 또는 단계가 존재하지 않을 때.
            ServiceError(CONFLICT): 같은 (역할, 단계) 기록이 이미 있을 때.
        """
        logger.debug("Create role phase dependency %s", dependency)
        data = parse(RolePhaseDependencyCreate, dependency, "role phase dependency")

        with self.uow:
            if not self.role_repo.find_by_id(data.role_id):
                raise not_found(f"Role with id '{data.role_id}' not found.")
            if not self.phase_repo.find_by_id(data.phase_id):
                raise not_found(f"Phase with id '{data.phase_id}' not found.")
            if self.dependency_repo.find_by_role_and_phase(data.role_id, data.phase_id):
                raise conflict(f"Role '{data.role_id}' already depends on phase '{data.phase_id}'.")

            now = utcnow()
            new_dependency = models.RolePhaseDependency(
                id=str(data.id) if data.id else self.id_generator(),
                role_id=data.role_id,
                phase_id=data.phase_id,
                phase_type=data.phase_type,
                created=now,
                created_by=data.created_by,
                updated=now,
                updated_by=data.created_by,
            )
            result = dependency_to_dict(self.dependency_repo.create(new_dependency))

        logger.info("Role %s may now use phase %s", data.role_id, data.phase_id)
        return result

    def delete_dependency(self, dependency_id: str) -> bool:
        """
        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 허용 기록을 찾을 수 없을 때.
        """
        logger.debug("Delete role phase dependency %s", dependency_id)
        with self.uow:
            dependency = self.dependency_repo.find_by_id(dependency_id)
            if not dependency:
                raise not_found(f"Role phase dependency with id '{dependency_id}' not found.")
            self.dependency_repo.delete(dependency)

        logger.info("Role phase dependency %s deleted", dependency_id)
        return True

    def search_dependencies(self, criteria: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """roleId, phaseId, phaseType으로 허용 기록을 검색합니다. (생성일 오름차순)"""
        search = parse(RolePhaseDependencySearch, criteria, "role phase dependency search")
        filters = {"role_id": search.role_id, "phase_id": search.phase_id, "phase_type": search.phase_type}
        skip, limit = page_window(search.page, search.per_page)

        total = self.dependency_repo.count(**filters)
        dependencies = self.dependency_repo.find_many(**filters, skip=skip, limit=limit)
        return paged_result(total, search.page, search.per_page, [dependency_to_dict(d) for d in dependencies])
