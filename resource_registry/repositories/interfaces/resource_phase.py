from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from resource_registry.database import models

class IResourcePhaseRepository(ABC):
    @abstractmethod
    def create_many(self, resource_phases: List[models.ResourcePhase]) -> List[models.ResourcePhase]:
        """여러 개의 리소스-단계 연결을 한 번에 추가하고 flush 합니다."""
        pass

    @abstractmethod
    def list_by_resource_id(self, resource_id: str) -> List[models.ResourcePhase]:
        """특정 리소스에 연결된 모든 단계를 단계 이름 오름차순으로 조회합니다. (phase 포함)"""
        pass

    @abstractmethod
    def find_by_resource_and_phase(self, resource_id: str, phase_id: str) -> Optional[models.ResourcePhase]:
        """리소스와 단계의 특정 연결을 조회합니다."""
        pass

    @abstractmethod
    def find_by_resource_and_phases(self, resource_id: str, phase_ids: Iterable[str]) -> List[models.ResourcePhase]:
        """리소스에 이미 연결된 단계 중 주어진 ID에 해당하는 연결들을 조회합니다."""
        pass

    @abstractmethod
    def count_by_phase_id(self, phase_id: str) -> int:
        """특정 단계를 참조하는 연결의 개수를 조회합니다."""
        pass

    @abstractmethod
    def delete(self, resource_phase: models.ResourcePhase) -> bool:
        """특정 연결 하나를 삭제합니다."""
        pass

    @abstractmethod
    def delete_by_resource_id(self, resource_id: str) -> int:
        """특정 리소스의 모든 연결을 삭제하고, 삭제된 행 수를 반환합니다."""
        pass
