from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from resource_registry.database import models

class IPhaseRepository(ABC):
    @abstractmethod
    def create(self, phase_model: models.Phase) -> models.Phase:
        """새로운 단계를 세션에 추가하고 flush 합니다."""
        pass

    @abstractmethod
    def find_by_id(self, phase_id: str) -> Optional[models.Phase]:
        """고유 ID로 특정 단계를 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, phase_ids: Iterable[str]) -> List[models.Phase]:
        """주어진 ID 중 존재하는 단계들을 조회합니다. (순서 보장 없음)"""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Phase]:
        """이름으로 특정 단계를 조회합니다."""
        pass

    @abstractmethod
    def update(self, phase: models.Phase) -> models.Phase:
        """변경된 단계를 flush 합니다."""
        pass

    @abstractmethod
    def delete(self, phase: models.Phase) -> bool:
        """특정 단계를 삭제합니다."""
        pass

    @abstractmethod
    def count(self, name: Optional[str] = None) -> int:
        """검색 조건에 맞는 단계의 개수를 조회합니다."""
        pass

    @abstractmethod
    def find_many(self, name: Optional[str] = None, skip: int = 0, limit: int = 20) -> List[models.Phase]:
        """검색 조건에 맞는 단계 목록을 이름 오름차순으로 조회합니다."""
        pass
