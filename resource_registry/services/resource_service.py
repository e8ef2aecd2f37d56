import logging
from typing import Any, Callable, Dict, Optional

from resource_registry.database import models
from resource_registry.repositories.interfaces import (
    IResourcePhaseRepository, IResourceRepository, IRoleRepository, IUnitOfWork
)
from resource_registry.services.exceptions import bad_request, conflict, not_found, validation
from resource_registry.services.resource_phase_service import ResourcePhaseService
from resource_registry.services.schemas import ResourceCreate, ResourceSearch, ResourceUpdate, parse
from resource_registry.services.serializers import resource_to_dict
from resource_registry.utils.ids import generate_id
from resource_registry.utils.pagination import page_window, paged_result
from resource_registry.utils.timestamps import to_utc_naive, utcnow

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Resource with the same challengeId/memberId and roleId already exists."


class ResourceService:
    """챌린지/회원에 역할을 부여한 배정 기록(Resource)을 관리합니다."""

    def __init__(self, resource_repo: IResourceRepository, role_repo: IRoleRepository,
                 resource_phase_repo: IResourcePhaseRepository, resource_phase_service: ResourcePhaseService,
                 uow: IUnitOfWork, id_generator: Callable[[], str] = generate_id):
        """
        ResourceService를 초기화합니다.

        Args:
            resource_repo: 리소스 데이터에 접근하기 위한 리포지토리.
            role_repo: 역할 존재 여부 확인용 리포지토리.
            resource_phase_repo: 리소스-단계 연결 리포지토리 (단계 집합 교체용).
            resource_phase_service: 역할-단계 자격 확인과 연결 행 생성을 담당하는 서비스.
            uow: 쓰기 작업을 하나의 트랜잭션으로 묶는 Unit of Work.
            id_generator: 새 리소스의 ID를 만드는 함수.
        """
        self.resource_repo = resource_repo
        self.role_repo = role_repo
        self.resource_phase_repo = resource_phase_repo
        self.resource_phase_service = resource_phase_service
        self.uow = uow
        self.id_generator = id_generator

    def get_resource(self, resource_id: str, include_role: bool = False, include_phases: bool = False) -> Dict[str, Any]:
        """
        ID로 특정 리소스를 조회합니다.

        Args:
            resource_id: 조회할 리소스의 ID.
            include_role: 응답에 역할 요약(role)을 포함할지 여부.
            include_phases: 응답에 연결된 단계 목록(phases)을 포함할지 여부.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 리소스를 찾을 수 없을 때.
        """
        logger.debug("Get resource by id %s", resource_id)
        resource = self.resource_repo.find_by_id(resource_id, include_role=include_role, include_phases=include_phases)
        if not resource:
            raise not_found(f"Resource with id '{resource_id}' not found.")
        return resource_to_dict(resource, include_role, include_phases)

    def create_resource(self, resource: Dict[str, Any]) -> Dict[str, Any]:
        """
        새로운 리소스를 생성합니다.

        phases가 주어지면 리소스와 리소스-단계 연결을 하나의 트랜잭션으로 저장합니다.
        중간에 실패하면 아무것도 저장되지 않습니다.

        Args:
            resource: roleId, createdBy(필수), challengeId / memberId(둘 중 하나 이상),
                memberHandle, legacyId, phases(단계 ID 목록) 등을 담은 딕셔너리.

        Returns:
            역할(role)과 단계(phases)가 포함된 리소스 딕셔너리.

        Raises:
            ServiceError(VALIDATION): 입력 형식이 잘못되었거나, 역할에 허용되지 않은 단계가 있을 때.
            ServiceError(BAD_REQUEST): roleId에 해당하는 역할이 없을 때.
            ServiceError(CONFLICT): 같은 (roleId, challengeId, memberId) 리소스가 이미 있을 때.
            ServiceError(NOT_FOUND): phases 중 존재하지 않는 단계가 있을 때.
        """
        logger.debug("Create resource %s", resource)
        data = parse(ResourceCreate, resource, "resource")
        phase_ids = [str(p) for p in data.phases or []]

        with self.uow:
            if not self.role_repo.find_by_id(data.role_id):
                raise bad_request(f"Role with id '{data.role_id}' does not exist.")

            if self.resource_repo.find_by_assignment(data.role_id, data.challenge_id, data.member_id):
                raise conflict(DUPLICATE_MESSAGE)

            self.resource_phase_service.ensure_role_eligibility(data.role_id, phase_ids)

            now = utcnow()
            new_resource = models.Resource(
                id=str(data.id) if data.id else self.id_generator(),
                challenge_id=data.challenge_id,
                member_id=data.member_id,
                member_handle=data.member_handle,
                role_id=data.role_id,
                created=to_utc_naive(data.created) or now,
                created_by=data.created_by,
                updated=to_utc_naive(data.updated) or now,
                updated_by=data.updated_by,
                legacy_id=data.legacy_id,
            )
            created_resource = self.resource_repo.create(new_resource)
            resource_id = created_resource.id

            if phase_ids:
                rows = self.resource_phase_service.build_rows(resource_id, phase_ids, data.created_by)
                self.resource_phase_repo.create_many(rows)

        logger.info("Resource %s created (role=%s, phases=%d)", resource_id, data.role_id, len(phase_ids))
        return self.get_resource(resource_id, include_role=True, include_phases=True)

    def update_resource(self, resource_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        리소스를 수정합니다.

        phases가 주어지면(빈 리스트 포함) 기존 단계 연결을 모두 지우고 주어진 목록으로
        다시 만듭니다. 병합이 아니라 전체 교체입니다. phases를 생략하면 연결은 그대로
        유지되며, 역할이 바뀌는 경우 기존 연결이 새 역할에도 허용되는지 다시 확인합니다.

        Returns:
            역할(role)과 단계(phases)가 포함된 리소스 딕셔너리.

        Raises:
            ServiceError(VALIDATION): 입력 형식이 잘못되었거나, 수정 결과 challengeId와 memberId가 모두 비게 될 때.
            ServiceError(NOT_FOUND): 리소스 또는 phases 중 일부 단계가 없을 때.
            ServiceError(BAD_REQUEST): 새 roleId에 해당하는 역할이 없을 때.
            ServiceError(CONFLICT): 수정 결과가 다른 리소스와 (roleId, challengeId, memberId)가 같을 때.
        """
        logger.debug("Update resource %s with %s", resource_id, patch)
        data = parse(ResourceUpdate, patch, "resource")
        changes = data.model_dump(exclude_unset=True)
        phase_ids = None if data.phases is None else [str(p) for p in data.phases]

        with self.uow:
            resource = self.resource_repo.find_by_id(resource_id)
            if not resource:
                raise not_found(f"Resource with id '{resource_id}' not found.")

            if data.role_id and not self.role_repo.find_by_id(data.role_id):
                raise bad_request(f"Role with id '{data.role_id}' does not exist.")

            role_id = data.role_id or resource.role_id
            challenge_id = changes["challenge_id"] if "challenge_id" in changes else resource.challenge_id
            member_id = changes["member_id"] if "member_id" in changes else resource.member_id
            if not challenge_id and not member_id:
                raise validation("Either challengeId or memberId must be provided")

            if self.resource_repo.find_by_assignment(role_id, challenge_id, member_id, exclude_id=resource_id):
                raise conflict(DUPLICATE_MESSAGE)

            if phase_ids is not None:
                self.resource_phase_service.ensure_role_eligibility(role_id, phase_ids)
            elif role_id != resource.role_id:
                current_phase_ids = [rp.phase_id for rp in self.resource_phase_repo.list_by_resource_id(resource_id)]
                self.resource_phase_service.ensure_role_eligibility(role_id, current_phase_ids)

            resource.role_id = role_id
            resource.challenge_id = challenge_id or None
            resource.member_id = member_id or None
            if "member_handle" in changes:
                resource.member_handle = data.member_handle
            if "legacy_id" in changes:
                resource.legacy_id = data.legacy_id
            resource.updated = utcnow()
            resource.updated_by = data.updated_by or resource.updated_by
            self.resource_repo.update(resource)

            if phase_ids is not None:
                # 전체 교체: 기존 연결을 먼저 지운 뒤 새로 만듭니다.
                self.resource_phase_repo.delete_by_resource_id(resource_id)
                if phase_ids:
                    rows = self.resource_phase_service.build_rows(resource_id, phase_ids, resource.updated_by)
                    self.resource_phase_repo.create_many(rows)

        logger.info("Resource %s updated", resource_id)
        return self.get_resource(resource_id, include_role=True, include_phases=True)

    def delete_resource(self, resource_id: str) -> bool:
        """
        리소스를 삭제합니다. 연결된 모든 리소스-단계 연결도 같은 트랜잭션에서 삭제됩니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 리소스를 찾을 수 없을 때.
        """
        logger.debug("Delete resource %s", resource_id)
        with self.uow:
            resource = self.resource_repo.find_by_id(resource_id)
            if not resource:
                raise not_found(f"Resource with id '{resource_id}' not found.")
            self.resource_repo.delete(resource)

        logger.info("Resource %s deleted", resource_id)
        return True

    def search_resources(self, criteria: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        조건에 맞는 리소스를 생성일 내림차순으로 페이지 단위 조회합니다.

        Args:
            criteria: challengeId, memberId, memberHandle(부분 일치, 대소문자 무시), roleId,
                legacyId, page, perPage, includeRole, includePhases.

        Returns:
            {total, page, perPage, result} 형태의 딕셔너리.
        """
        logger.debug("Search resources with %s", criteria)
        search = parse(ResourceSearch, criteria, "resource search")
        filters = {
            "challenge_id": search.challenge_id,
            "member_id": search.member_id,
            "member_handle": search.member_handle,
            "role_id": search.role_id,
            "legacy_id": search.legacy_id,
        }
        skip, limit = page_window(search.page, search.per_page)

        total = self.resource_repo.count(**filters)
        resources = self.resource_repo.find_many(
            **filters, skip=skip, limit=limit,
            include_role=search.include_role, include_phases=search.include_phases
        )
        result = [resource_to_dict(r, search.include_role, search.include_phases) for r in resources]
        return paged_result(total, search.page, search.per_page, result)
