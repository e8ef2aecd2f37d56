# tests/services/test_role_phase_dependency_service.py
import pytest
from unittest.mock import MagicMock

from resource_registry.services.role_phase_dependency_service import RolePhaseDependencyService
from resource_registry.services.exceptions import ErrorKind, ServiceError
from resource_registry.database import models

@pytest.fixture
def dependency_service(mock_dependency_repo, mock_role_repo, mock_phase_repo, mock_uow,
                       id_generator) -> RolePhaseDependencyService:
    return RolePhaseDependencyService(
        mock_dependency_repo, mock_role_repo, mock_phase_repo, mock_uow, id_generator=id_generator
    )

@pytest.fixture
def role_and_phase(mock_role_repo: MagicMock, mock_phase_repo: MagicMock):
    mock_role_repo.find_by_id.return_value = models.Role(id="role-1", name="Submitter", created_by="u1")
    mock_phase_repo.find_by_id.return_value = models.Phase(id="phase-1", name="Registration", created_by="u1")

class TestCreateDependency:
    def test_create_dependency_success(self, dependency_service: RolePhaseDependencyService, role_and_phase,
                                       mock_dependency_repo: MagicMock):
        mock_dependency_repo.find_by_role_and_phase.return_value = None
        mock_dependency_repo.create.side_effect = lambda d: d

        dependency = dependency_service.create_dependency({
            "roleId": "role-1", "phaseId": "phase-1", "phaseType": "Registration", "createdBy": "u1",
        })

        assert dependency["id"] == "id-1"
        assert dependency["roleId"] == "role-1"
        assert dependency["phaseId"] == "phase-1"
        assert dependency["phaseType"] == "Registration"

    def test_create_dependency_duplicate(self, dependency_service: RolePhaseDependencyService, role_and_phase,
                                         mock_dependency_repo: MagicMock):
        """같은 (역할, 단계) 허용 기록이 있으면 CONFLICT 오류가 발생합니다."""
        mock_dependency_repo.find_by_role_and_phase.return_value = models.RolePhaseDependency(
            id="dep-1", role_id="role-1", phase_id="phase-1", created_by="u1"
        )

        with pytest.raises(ServiceError) as exc_info:
            dependency_service.create_dependency({"roleId": "role-1", "phaseId": "phase-1", "createdBy": "u1"})

        assert exc_info.value.kind is ErrorKind.CONFLICT
        mock_dependency_repo.create.assert_not_called()

    def test_create_dependency_unknown_phase(self, dependency_service: RolePhaseDependencyService,
                                             role_and_phase, mock_phase_repo: MagicMock,
                                             mock_dependency_repo: MagicMock):
        mock_phase_repo.find_by_id.return_value = None

        with pytest.raises(ServiceError) as exc_info:
            dependency_service.create_dependency({"roleId": "role-1", "phaseId": "nope", "createdBy": "u1"})

        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        mock_dependency_repo.create.assert_not_called()

class TestDependencyQueries:
    def test_delete_dependency_not_found(self, dependency_service: RolePhaseDependencyService,
                                         mock_dependency_repo: MagicMock):
        mock_dependency_repo.find_by_id.return_value = None

        with pytest.raises(ServiceError) as exc_info:
            dependency_service.delete_dependency("missing")

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_search_dependencies(self, dependency_service: RolePhaseDependencyService,
                                 mock_dependency_repo: MagicMock):
        mock_dependency_repo.count.return_value = 0
        mock_dependency_repo.find_many.return_value = []

        result = dependency_service.search_dependencies({"roleId": "role-1"})

        assert result == {"total": 0, "page": 1, "perPage": 20, "result": []}
        mock_dependency_repo.find_many.assert_called_once_with(
            role_id="role-1", phase_id=None, phase_type=None, skip=0, limit=20
        )
