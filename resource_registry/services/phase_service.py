import logging
from typing import Any, Callable, Dict, Optional

from resource_registry.database import models
from resource_registry.repositories.interfaces import IPhaseRepository, IResourcePhaseRepository, IUnitOfWork
from resource_registry.services.exceptions import conflict, not_found
from resource_registry.services.schemas import PhaseCreate, PhaseSearch, PhaseUpdate, parse
from resource_registry.services.serializers import phase_to_dict
from resource_registry.utils.ids import generate_id
from resource_registry.utils.pagination import page_window, paged_result
from resource_registry.utils.timestamps import to_utc_naive, utcnow

logger = logging.getLogger(__name__)


class PhaseService:
    """워크플로우 단계(Phase) 참조 데이터를 관리합니다."""

    def __init__(self, phase_repo: IPhaseRepository, resource_phase_repo: IResourcePhaseRepository,
                 uow: IUnitOfWork, id_generator: Callable[[], str] = generate_id):
        """
        PhaseService를 초기화합니다.

        Args:
            phase_repo: 단계 데이터에 접근하기 위한 리포지토리.
            resource_phase_repo: 리소스-단계 연결 리포지토리 (단계 삭제 시 검증용).
            uow: 쓰기 작업을 하나의 트랜잭션으로 묶는 Unit of Work.
            id_generator: 새 단계의 ID를 만드는 함수.
        """
        self.phase_repo = phase_repo
        self.resource_phase_repo = resource_phase_repo
        self.uow = uow
        self.id_generator = id_generator

    def get_phase(self, phase_id: str) -> Dict[str, Any]:
        """
        ID로 특정 단계를 조회합니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 단계를 찾을 수 없을 때.
        """
        logger.debug("Get phase by id %s", phase_id)
        phase = self.phase_repo.find_by_id(phase_id)
        if not phase:
            raise not_found(f"Phase with id '{phase_id}' not found.")
        return phase_to_dict(phase)

    def create_phase(self, phase: Dict[str, Any]) -> Dict[str, Any]:
        """
        새로운 단계를 생성합니다.

        Raises:
            ServiceError(VALIDATION): name, createdBy가 없거나 형식이 잘못되었을 때.
            ServiceError(CONFLICT): 동일한 이름의 단계가 이미 존재할 때.
        """
        logger.debug("Create phase %s", phase)
        data = parse(PhaseCreate, phase, "phase")

        with self.uow:
            if self.phase_repo.find_by_name(data.name):
                raise conflict(f"Phase with name '{data.name}' already exists.")

            now = utcnow()
            new_phase = models.Phase(
                id=str(data.id) if data.id else self.id_generator(),
                name=data.name,
                description=data.description,
                created=to_utc_naive(data.created) or now,
                created_by=data.created_by,
                updated=to_utc_naive(data.updated) or now,
                updated_by=data.updated_by,
            )
            created_phase = self.phase_repo.create(new_phase)
            result = phase_to_dict(created_phase)

        logger.info("Phase '%s' created with id %s", result["name"], result["id"])
        return result

    def update_phase(self, phase_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        단계를 수정합니다. description은 명시적인 None으로 지울 수 있습니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 단계를 찾을 수 없을 때.
            ServiceError(CONFLICT): 바꾸려는 이름을 다른 단계가 이미 사용 중일 때.
        """
        logger.debug("Update phase %s with %s", phase_id, patch)
        data = parse(PhaseUpdate, patch, "phase")
        changes = data.model_dump(exclude_unset=True)

        with self.uow:
            phase = self.phase_repo.find_by_id(phase_id)
            if not phase:
                raise not_found(f"Phase with id '{phase_id}' not found.")

            if data.name and data.name != phase.name and self.phase_repo.find_by_name(data.name):
                raise conflict(f"Phase with name '{data.name}' already exists.")

            for field, value in changes.items():
                if value is None and field != "description":
                    continue
                setattr(phase, field, value)
            phase.updated = utcnow()

            updated_phase = self.phase_repo.update(phase)
            result = phase_to_dict(updated_phase)

        logger.info("Phase %s updated", phase_id)
        return result

    def delete_phase(self, phase_id: str) -> bool:
        """
        단계를 삭제합니다. 단, 이 단계에 연결된 리소스가 없어야 합니다.

        Raises:
            ServiceError(NOT_FOUND): 해당 ID의 단계를 찾을 수 없을 때.
            ServiceError(CONFLICT): 이 단계에 연결된 리소스가 하나 이상 존재할 때.
        """
        logger.debug("Delete phase %s", phase_id)
        with self.uow:
            phase = self.phase_repo.find_by_id(phase_id)
            if not phase:
                raise not_found(f"Phase with id '{phase_id}' not found.")

            usage_count = self.resource_phase_repo.count_by_phase_id(phase_id)
            if usage_count > 0:
                raise conflict(f"Phase '{phase_id}' is used by {usage_count} resource(s).")

            self.phase_repo.delete(phase)

        logger.info("Phase %s deleted", phase_id)
        return True

    def search_phases(self, criteria: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """조건(name 부분 일치)에 맞는 단계를 이름 오름차순으로 페이지 단위 조회합니다."""
        logger.debug("Search phases with %s", criteria)
        search = parse(PhaseSearch, criteria, "phase search")
        skip, limit = page_window(search.page, search.per_page)

        total = self.phase_repo.count(name=search.name)
        phases = self.phase_repo.find_many(name=search.name, skip=skip, limit=limit)
        return paged_result(total, search.page, search.per_page, [phase_to_dict(p) for p in phases])
