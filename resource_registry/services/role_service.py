import logging
from typing import Any, Callable, Dict, Optional

from resource_registry.database import models
from resource_registry.repositories.interfaces import IResourceRepository, IRoleRepository, IUnitOfWork
from resource_registry.services.exceptions import conflict, not_found
from resource_registry.services.schemas import RoleCreate, RoleSearch, RoleUpdate, parse
from resource_registry.services.serializers import role_to_dict
from resource_registry.utils.ids import generate_id
from resource_registry.utils.pagination import page_window, paged_result
from resource_registry.utils.timestamps import to_utc_naive, utcnow

logger = logging.getLogger(__name__)


class RoleService:
    """리소스 역할(Role) 참조 데이터의 생성, 조회, 수정, 삭제, 검색을 제공합니다."""

    def __init__(self, role_repo: IRoleRepository, resource_repo: IResourceRepository, uow: IUnitOfWork,
                 id_generator: Callable[[], str] = generate_id):
        """
        RoleService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            resource_repo: 리소스 데이터에 접근하기 위한 리포지토리 (역할 삭제 시 검증용).
            uow: 쓰기 작업을 하나의 트랜잭션으로 묶는 Unit of Work.
            id_generator: 새 역할의 ID를 만드는 함수.
        """
        self.role_repo = role_repo
        self.resource_repo = resource_repo
        self.uow = uow
        self.id_generator = id_generator

    def get_role(self, role_id: str) -> Dict[str, Any]:
        """
        ID로 특정 역할을 조회합니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 역할을 찾을 수 없을 때.
        """
        logger.debug("Get role by id %s", role_id)
        role = self.role_repo.find_by_id(role_id)
        if not role:
            raise not_found(f"Role with id '{role_id}' not found.")
        return role_to_dict(role)

    def create_role(self, role: Dict[str, Any]) -> Dict[str, Any]:
        """
        새로운 역할을 생성합니다.

        Args:
            role: name, createdBy(필수), fullAccess, selfObtainable, legacyId 등을 담은 딕셔너리.

        Returns:
            생성된 역할의 딕셔너리.

        Raises:
            ServiceError(VALIDATION): 필수 필드가 없거나 형식이 잘못되었을 때.
            ServiceError(CONFLICT): 동일한 이름의 역할이 이미 존재할 때.
        """
        logger.debug("Create role %s", role)
        data = parse(RoleCreate, role, "role")

        with self.uow:
            if self.role_repo.find_by_name(data.name):
                raise conflict(f"Role with name '{data.name}' already exists.")

            now = utcnow()
            new_role = models.Role(
                id=str(data.id) if data.id else self.id_generator(),
                name=data.name,
                full_access=data.full_access,
                self_obtainable=data.self_obtainable,
                created=to_utc_naive(data.created) or now,
                created_by=data.created_by,
                updated=to_utc_naive(data.updated) or now,
                updated_by=data.updated_by,
                legacy_id=data.legacy_id,
            )
            created_role = self.role_repo.create(new_role)
            result = role_to_dict(created_role)

        logger.info("Role '%s' created with id %s", result["name"], result["id"])
        return result

    def update_role(self, role_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        역할을 수정합니다. 전달된 필드만 기존 값 위에 덮어씁니다.

        Raises:
            ServiceError(VALIDATION): 입력 형식이 잘못되었을 때.
            ServiceError(NOT_FOUND): 해당 ID의 역할을 찾을 수 없을 때.
            ServiceError(CONFLICT): 바꾸려는 이름을 다른 역할이 이미 사용 중일 때.
        """
        logger.debug("Update role %s with %s", role_id, patch)
        data = parse(RoleUpdate, patch, "role")
        changes = data.model_dump(exclude_unset=True)

        with self.uow:
            role = self.role_repo.find_by_id(role_id)
            if not role:
                raise not_found(f"Role with id '{role_id}' not found.")

            if data.name and data.name != role.name and self.role_repo.find_by_name(data.name):
                raise conflict(f"Role with name '{data.name}' already exists.")

            for field, value in changes.items():
                # legacy_id만 명시적인 None으로 지울 수 있습니다.
                if value is None and field != "legacy_id":
                    continue
                setattr(role, field, value)
            role.updated = utcnow()

            updated_role = self.role_repo.update(role)
            result = role_to_dict(updated_role)

        logger.info("Role %s updated", role_id)
        return result

    def delete_role(self, role_id: str) -> bool:
        """
        역할을 삭제합니다. 단, 이 역할을 참조하는 리소스가 없어야 합니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 역할을 찾을 수 없을 때.
            ServiceError(CONFLICT): 이 역할을 사용하는 리소스가 하나 이상 존재할 때.
        """
        logger.debug("Delete role %s", role_id)
        with self.uow:
            role = self.role_repo.find_by_id(role_id)
            if not role:
                raise not_found(f"Role with id '{role_id}' not found.")

            resource_count = self.resource_repo.count_by_role_id(role_id)
            if resource_count > 0:
                raise conflict(f"Role '{role_id}' is used by {resource_count} resource(s).")

            self.role_repo.delete(role)

        logger.info("Role %s deleted", role_id)
        return True

    def search_roles(self, criteria: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        조건에 맞는 역할을 이름 오름차순으로 페이지 단위 조회합니다.

        Args:
            criteria: name(부분 일치, 대소문자 무시), fullAccess, selfObtainable, page, perPage.

        Returns:
            {total, page, perPage, result} 형태의 딕셔너리.
        """
        logger.debug("Search roles with %s", criteria)
        search = parse(RoleSearch, criteria, "role search")
        filters = {
            "name": search.name,
            "full_access": search.full_access,
            "self_obtainable": search.self_obtainable,
        }
        skip, limit = page_window(search.page, search.per_page)

        total = self.role_repo.count(**filters)
        roles = self.role_repo.find_many(**filters, skip=skip, limit=limit)
        return paged_result(total, search.page, search.per_page, [role_to_dict(r) for r in roles])
