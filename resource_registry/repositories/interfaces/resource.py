from abc import ABC, abstractmethod
from typing import List, Optional
from resource_registry.database import models

class IResourceRepository(ABC):
    @abstractmethod
    def create(self, resource_model: models.Resource) -> models.Resource:
        """새로운 리소스를 세션에 추가하고 flush 합니다."""
        pass

    @abstractmethod
    def find_by_id(self, resource_id: str, include_role: bool = False,
                   include_phases: bool = False) -> Optional[models.Resource]:
        """
        고유 ID로 특정 리소스를 조회합니다.

        Args:
            resource_id: 조회할 리소스의 ID.
            include_role: 역할(role)을 함께 로딩할지 여부.
            include_phases: 연결된 단계(resource_phases -> phase)를 함께 로딩할지 여부.
        """
        pass

    @abstractmethod
    def find_by_assignment(self, role_id: str, challenge_id: Optional[str], member_id: Optional[str],
                           exclude_id: Optional[str] = None) -> Optional[models.Resource]:
        """
        (role_id, challenge_id, member_id) 조합이 같은 리소스를 조회합니다.
        None 값은 '값 없음'과 정확히 일치하는 것으로 취급합니다.

        Args:
            exclude_id: 비교 대상에서 제외할 리소스 ID (수정 시 자기 자신).
        """
        pass

    @abstractmethod
    def count_by_role_id(self, role_id: str) -> int:
        """특정 역할을 참조하는 리소스의 개수를 조회합니다."""
        pass

    @abstractmethod
    def update(self, resource: models.Resource) -> models.Resource:
        """변경된 리소스를 flush 합니다."""
        pass

    @abstractmethod
    def delete(self, resource: models.Resource) -> bool:
        """특정 리소스를 삭제합니다. 연결된 resource_phases도 함께 삭제됩니다."""
        pass

    @abstractmethod
    def count(self, challenge_id: Optional[str] = None, member_id: Optional[str] = None,
              member_handle: Optional[str] = None, role_id: Optional[str] = None,
              legacy_id: Optional[str] = None) -> int:
        """검색 조건에 맞는 리소스의 개수를 조회합니다."""
        pass

    @abstractmethod
    def find_many(self, challenge_id: Optional[str] = None, member_id: Optional[str] = None,
                  member_handle: Optional[str] = None, role_id: Optional[str] = None,
                  legacy_id: Optional[str] = None, skip: int = 0, limit: int = 20,
                  include_role: bool = False, include_phases: bool = False) -> List[models.Resource]:
        """검색 조건에 맞는 리소스 목록을 생성일 내림차순으로 조회합니다."""
        pass
