from abc import ABC, abstractmethod
from typing import List, Optional
from resource_registry.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def create(self, role_model: models.Role) -> models.Role:
        """새로운 역할을 세션에 추가하고 flush 합니다."""
        pass

    @abstractmethod
    def find_by_id(self, role_id: str) -> Optional[models.Role]:
        """고유 ID로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Role]:
        """이름으로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def update(self, role: models.Role) -> models.Role:
        """변경된 역할을 flush 합니다."""
        pass

    @abstractmethod
    def delete(self, role: models.Role) -> bool:
        """특정 역할을 삭제합니다."""
        pass

    @abstractmethod
    def count(self, name: Optional[str] = None, full_access: Optional[bool] = None,
              self_obtainable: Optional[bool] = None) -> int:
        """검색 조건에 맞는 역할의 개수를 조회합니다."""
        pass

    @abstractmethod
    def find_many(self, name: Optional[str] = None, full_access: Optional[bool] = None,
                  self_obtainable: Optional[bool] = None, skip: int = 0, limit: int = 20) -> List[models.Role]:
        """
        검색 조건에 맞는 역할 목록을 이름 오름차순으로 조회합니다.

        Args:
            name: 이름에 포함된 문자열 (대소문자 구분 없음).
            full_access: fullAccess 플래그 값.
            self_obtainable: selfObtainable 플래그 값.
            skip: 건너뛸 행 수.
            limit: 최대 반환 행 수.
        """
        pass
