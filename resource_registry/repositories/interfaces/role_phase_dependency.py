from abc import ABC, abstractmethod
from typing import List, Optional
from resource_registry.database import models

class IRolePhaseDependencyRepository(ABC):
    @abstractmethod
    def create(self, dependency_model: models.RolePhaseDependency) -> models.RolePhaseDependency:
        """새로운 역할-단계 허용 기록을 추가하고 flush 합니다."""
        pass

    @abstractmethod
    def find_by_id(self, dependency_id: str) -> Optional[models.RolePhaseDependency]:
        """고유 ID로 특정 허용 기록을 조회합니다."""
        pass

    @abstractmethod
    def find_by_role_and_phase(self, role_id: str, phase_id: str) -> Optional[models.RolePhaseDependency]:
        """역할과 단계 조합으로 허용 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_phase_ids_by_role_id(self, role_id: str) -> List[str]:
        """특정 역할에 허용된 단계 ID 목록을 조회합니다. 기록이 없으면 빈 리스트."""
        pass

    @abstractmethod
    def delete(self, dependency: models.RolePhaseDependency) -> bool:
        """특정 허용 기록을 삭제합니다."""
        pass

    @abstractmethod
    def count(self, role_id: Optional[str] = None, phase_id: Optional[str] = None,
              phase_type: Optional[str] = None) -> int:
        """검색 조건에 맞는 허용 기록의 개수를 조회합니다."""
        pass

    @abstractmethod
    def find_many(self, role_id: Optional[str] = None, phase_id: Optional[str] = None,
                  phase_type: Optional[str] = None, skip: int = 0, limit: int = 20) -> List[models.RolePhaseDependency]:
        """검색 조건에 맞는 허용 기록 목록을 생성일 오름차순으로 조회합니다."""
        pass
