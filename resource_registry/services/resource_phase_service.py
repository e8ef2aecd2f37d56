import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from resource_registry.database import models
from resource_registry.repositories.interfaces import (
    IPhaseRepository, IResourcePhaseRepository, IResourceRepository,
    IRolePhaseDependencyRepository, IRoleRepository, IUnitOfWork
)
from resource_registry.services.exceptions import conflict, not_found, validation
from resource_registry.services.schemas import PhaseIdList, parse
from resource_registry.services.serializers import phase_summary
from resource_registry.utils.ids import generate_id
from resource_registry.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


class ResourcePhaseService:
    """
    리소스와 단계 사이의 연결(ResourcePhase)을 관리합니다.

    리소스에 연결된 단계 집합이 리소스의 암묵적인 상태이며, 이 상태는
    add_phases / remove_phase / ResourceService.update_resource(phases=...) 로만 바뀝니다.
    """

    def __init__(self, resource_repo: IResourceRepository, role_repo: IRoleRepository,
                 phase_repo: IPhaseRepository, resource_phase_repo: IResourcePhaseRepository,
                 dependency_repo: IRolePhaseDependencyRepository, uow: IUnitOfWork,
                 id_generator: Callable[[], str] = generate_id):
        """
        ResourcePhaseService를 초기화합니다.

        Args:
            resource_repo: 리소스 데이터에 접근하기 위한 리포지토리.
            role_repo: 역할 존재 여부 확인용 리포지토리.
            phase_repo: 단계 존재 여부 확인용 리포지토리.
            resource_phase_repo: 리소스-단계 연결 리포지토리.
            dependency_repo: 역할별 허용 단계 목록 리포지토리.
            uow: 쓰기 작업을 하나의 트랜잭션으로 묶는 Unit of Work.
            id_generator: 새 연결의 ID를 만드는 함수.
        """
        self.resource_repo = resource_repo
        self.role_repo = role_repo
        self.phase_repo = phase_repo
        self.resource_phase_repo = resource_phase_repo
        self.dependency_repo = dependency_repo
        self.uow = uow
        self.id_generator = id_generator

    def ensure_role_eligibility(self, role_id: str, phase_ids: Optional[Iterable[Any]]) -> None:
        """
        역할이 주어진 단계들에 연결될 수 있는지 확인합니다.

        역할과 모든 단계가 존재해야 합니다. 역할에 허용 단계 기록(RolePhaseDependency)이
        있으면 요청된 단계가 모두 그 목록에 있어야 하고, 기록이 없으면 제한하지 않습니다.
        phase_ids가 비어 있으면 아무것도 확인하지 않습니다.

        Raises:
            ServiceError(NOT_FOUND): 역할 또는 단계 중 하나라도 존재하지 않을 때.
            ServiceError(VALIDATION): 역할에 허용되지 않은 단계가 포함되어 있을 때.
        """
        phase_ids = [str(p) for p in phase_ids or []]
        logger.debug("Ensure role %s is eligible for phases %s", role_id, phase_ids)
        if not phase_ids:
            return

        role = self._require_role(role_id)
        self._require_phases(phase_ids)
        self._check_allowed_phases(role, phase_ids)

    def list_phases(self, resource_id: str) -> List[Dict[str, Any]]:
        """
        리소스에 연결된 단계 요약({id, name, description}) 목록을 단계 이름 순으로 조회합니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 리소스를 찾을 수 없을 때.
        """
        logger.debug("List phases of resource %s", resource_id)
        self._require_resource(resource_id)
        resource_phases = self.resource_phase_repo.list_by_resource_id(resource_id)
        return [phase_summary(rp.phase) for rp in resource_phases]

    def add_phases(self, resource_id: str, phase_ids: List[Any], user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        리소스에 여러 단계를 연결합니다. 전부 성공하거나 전부 실패합니다.

        Args:
            resource_id: 단계를 연결할 리소스의 ID.
            phase_ids: 연결할 단계 ID 목록 (중복 불가, 1개 이상).
            user_id: 감사 필드(createdBy/updatedBy)에 기록할 사용자.

        Returns:
            새로 연결된 단계 요약 목록 (요청 순서).

        Raises:
            ServiceError(VALIDATION): 목록이 비었거나, 중복 또는 잘못된 ID가 있거나, 역할에 허용되지 않은 단계일 때.
            ServiceError(NOT_FOUND): 리소스 또는 단계가 존재하지 않을 때.
            ServiceError(CONFLICT): 요청한 단계 중 하나라도 이미 연결되어 있을 때.
        """
        logger.debug("Add phases %s to resource %s", phase_ids, resource_id)
        ids = [str(p) for p in parse(PhaseIdList, {"phaseIds": phase_ids}, "phase list").phase_ids]

        with self.uow:
            resource = self._require_resource(resource_id)
            phases = self._require_phases(ids)

            existing = self.resource_phase_repo.find_by_resource_and_phases(resource_id, ids)
            if existing:
                attached = ", ".join(sorted(rp.phase_id for rp in existing))
                raise conflict(f"Resource '{resource_id}' already has phases: {attached}")

            role = self._require_role(resource.role_id)
            self._check_allowed_phases(role, ids)

            self.resource_phase_repo.create_many(self.build_rows(resource_id, ids, user_id))
            result = [phase_summary(p) for p in phases]

        logger.info("Added %d phase(s) to resource %s", len(ids), resource_id)
        return result

    def remove_phase(self, resource_id: str, phase_id: str) -> bool:
        """
        리소스와 단계의 연결 하나를 삭제합니다.

        Raises:
            ServiceError(NOT_FOUND): 리소스, 단계, 또는 두 엔티티 사이의 연결이 존재하지 않을 때.
        """
        logger.debug("Remove phase %s from resource %s", phase_id, resource_id)
        with self.uow:
            self._require_resource(resource_id)
            if not self.phase_repo.find_by_id(phase_id):
                raise not_found(f"Phase with id '{phase_id}' not found.")

            resource_phase = self.resource_phase_repo.find_by_resource_and_phase(resource_id, phase_id)
            if not resource_phase:
                raise not_found(f"Resource '{resource_id}' does not have phase '{phase_id}'.")

            self.resource_phase_repo.delete(resource_phase)

        logger.info("Removed phase %s from resource %s", phase_id, resource_id)
        return True

    def build_rows(self, resource_id: str, phase_ids: List[str], user_id: Optional[str]) -> List[models.ResourcePhase]:
        """리소스-단계 연결 모델 목록을 만듭니다. (세션에는 추가하지 않음)"""
        now = utcnow()
        return [
            models.ResourcePhase(
                id=self.id_generator(),
                resource_id=resource_id,
                phase_id=phase_id,
                created=now,
                created_by=user_id,
                updated=now,
                updated_by=user_id,
            )
            for phase_id in phase_ids
        ]

    def _require_resource(self, resource_id: str) -> models.Resource:
        resource = self.resource_repo.find_by_id(resource_id)
        if not resource:
            raise not_found(f"Resource with id '{resource_id}' not found.")
        return resource

    def _require_role(self, role_id: str) -> models.Role:
        role = self.role_repo.find_by_id(role_id)
        if not role:
            raise not_found(f"Role with id '{role_id}' not found.")
        return role

    def _require_phases(self, phase_ids: List[str]) -> List[models.Phase]:
        """모든 단계가 존재하는지 확인하고, 요청 순서대로 반환합니다."""
        found = {p.id: p for p in self.phase_repo.find_by_ids(phase_ids)}
        missing = [phase_id for phase_id in phase_ids if phase_id not in found]
        if missing:
            raise not_found(f"Phase(s) not found: {', '.join(missing)}")
        return [found[phase_id] for phase_id in phase_ids]

    def _check_allowed_phases(self, role: models.Role, phase_ids: List[str]) -> None:
        allowed = set(self.dependency_repo.list_phase_ids_by_role_id(role.id))
        if not allowed:
            return
        disallowed = [phase_id for phase_id in phase_ids if phase_id not in allowed]
        if disallowed:
            raise validation(f"Role '{role.name}' is not eligible for phase(s): {', '.join(disallowed)}")
