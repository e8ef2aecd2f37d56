# tests/services/conftest.py
from itertools import count
from unittest.mock import MagicMock

import pytest

from resource_registry.repositories.interfaces import (
    IPhaseRepository, IResourcePhaseRepository, IResourceRepository,
    IRolePhaseDependencyRepository, IRoleRepository, IUnitOfWork
)

# ===================================================================
#  공용 Fixture: 리포지토리 / Unit of Work 모의 객체
# ===================================================================

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IRoleRepository)

@pytest.fixture
def mock_phase_repo() -> MagicMock:
    """IPhaseRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IPhaseRepository)

@pytest.fixture
def mock_resource_repo() -> MagicMock:
    """IResourceRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IResourceRepository)

@pytest.fixture
def mock_resource_phase_repo() -> MagicMock:
    """IResourcePhaseRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IResourcePhaseRepository)

@pytest.fixture
def mock_dependency_repo() -> MagicMock:
    """IRolePhaseDependencyRepository에 대한 모의 객체를 생성합니다. 기본값: 허용 목록 없음"""
    repo = MagicMock(spec=IRolePhaseDependencyRepository)
    repo.list_phase_ids_by_role_id.return_value = []
    return repo

@pytest.fixture
def mock_uow() -> MagicMock:
    """
    IUnitOfWork 모의 객체. with 블록 안에서 발생한 예외를 삼키지 않도록
    __exit__이 False를 반환하게 설정합니다.
    """
    uow = MagicMock(spec=IUnitOfWork)
    uow.__exit__.return_value = False
    return uow

@pytest.fixture
def id_generator():
    """'id-1', 'id-2', ... 순서로 ID를 만드는 결정적 생성기"""
    counter = count(1)
    return lambda: f"id-{next(counter)}"
