# tests/integration/test_registry.py
"""
인메모리 SQLite 위에서 실제 리포지토리 / Unit of Work / 서비스를 함께 검증하는 통합 테스트
"""
import uuid

import pytest

from resource_registry.database import models
from resource_registry.services.exceptions import ErrorKind, ServiceError


def new_resource(role_id, phases=None, **fields):
    payload = {"challengeId": "c1", "memberId": "m1", "roleId": role_id, "createdBy": "u1"}
    payload.update(fields)
    if phases is not None:
        payload["phases"] = phases
    return payload


def phase_row_count(db_session, resource_id):
    return db_session.query(models.ResourcePhase).filter_by(resource_id=resource_id).count()


class TestResourceAssignment:
    def test_create_resource_with_phase_then_reject_duplicate(self, services, submitter, make_phase):
        """역할/단계를 만들고 리소스를 배정한 뒤, 같은 배정을 다시 만들면 CONFLICT"""
        # === Arrange ===
        registration = make_phase("Registration")

        # === Act ===
        resource = services.resources.create_resource(
            new_resource(submitter["id"], [registration["id"]], memberId=None)
        )

        # === Assert ===
        assert resource["role"]["name"] == "Submitter"
        assert resource["phases"] == [{"id": registration["id"], "name": "Registration", "description": None}]
        assert services.resources.get_resource(resource["id"])["challengeId"] == "c1"

        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(submitter["id"], [registration["id"]], memberId=None))
        assert exc_info.value.kind is ErrorKind.CONFLICT

    def test_missing_identifier_is_part_of_uniqueness(self, services, submitter):
        """challengeId 없이 memberId만 같은 두 배정도 중복으로 취급됩니다."""
        services.resources.create_resource(new_resource(submitter["id"], challengeId=None))

        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(submitter["id"], challengeId=None))

        assert exc_info.value.kind is ErrorKind.CONFLICT
        # 같은 회원이라도 챌린지가 다르면 별개의 배정
        services.resources.create_resource(new_resource(submitter["id"], challengeId="c2"))
        assert services.resources.search_resources({"memberId": "m1"})["total"] == 2

    def test_database_enforces_uniqueness_without_precheck(self, services, submitter, monkeypatch):
        """사전 중복 검사를 건너뛰어도 UNIQUE 제약 위반이 CONFLICT로 변환됩니다."""
        services.resources.create_resource(new_resource(submitter["id"], challengeId=None))
        monkeypatch.setattr(services.resources.resource_repo, "find_by_assignment", lambda *args, **kwargs: None)

        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(submitter["id"], challengeId=None))

        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert services.resources.search_resources()["total"] == 1

    def test_failed_phase_insert_rolls_back_resource(self, services, submitter, monkeypatch):
        """단계 연결 저장이 실패하면 리소스도 함께 롤백됩니다."""
        monkeypatch.setattr(
            services.resources.resource_phase_service, "ensure_role_eligibility", lambda *args, **kwargs: None
        )

        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(submitter["id"], [str(uuid.uuid4())]))

        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert services.resources.search_resources()["total"] == 0

    def test_create_resource_with_unknown_role(self, services):
        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(str(uuid.uuid4())))

        assert exc_info.value.kind is ErrorKind.BAD_REQUEST

    def test_delete_resource_removes_phase_rows(self, services, db_session, submitter, make_phase):
        """리소스를 삭제하면 연결된 리소스-단계 행이 남지 않습니다."""
        phase_ids = [make_phase("Registration")["id"], make_phase("Submission")["id"]]
        resource = services.resources.create_resource(new_resource(submitter["id"], phase_ids))
        assert phase_row_count(db_session, resource["id"]) == 2

        services.resources.delete_resource(resource["id"])

        assert phase_row_count(db_session, resource["id"]) == 0
        with pytest.raises(ServiceError) as exc_info:
            services.resources.get_resource(resource["id"])
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_update_replaces_phase_set(self, services, db_session, submitter, make_phase):
        """update의 phases는 병합이 아니라 전체 교체입니다."""
        appeals = make_phase("Appeals")
        registration = make_phase("Registration")
        review = make_phase("Review")
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        updated = services.resources.update_resource(
            resource["id"], {"phases": [review["id"], appeals["id"]], "updatedBy": "u2"}
        )

        assert [p["name"] for p in updated["phases"]] == ["Appeals", "Review"]
        assert updated["updatedBy"] == "u2"
        assert phase_row_count(db_session, resource["id"]) == 2

        cleared = services.resources.update_resource(resource["id"], {"phases": []})
        assert cleared["phases"] == []
        assert phase_row_count(db_session, resource["id"]) == 0

    def test_update_keeps_phases_when_omitted(self, services, submitter, make_phase):
        registration = make_phase("Registration")
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        updated = services.resources.update_resource(resource["id"], {"memberHandle": "alice"})

        assert updated["memberHandle"] == "alice"
        assert [p["id"] for p in updated["phases"]] == [registration["id"]]

    def test_update_into_existing_assignment_conflicts(self, services, submitter):
        services.resources.create_resource(new_resource(submitter["id"], memberId="m1"))
        other = services.resources.create_resource(new_resource(submitter["id"], memberId="m2"))

        with pytest.raises(ServiceError) as exc_info:
            services.resources.update_resource(other["id"], {"memberId": "m1"})

        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert services.resources.get_resource(other["id"])["memberId"] == "m2"

    def test_search_resources_by_handle(self, services, submitter):
        """memberHandle은 대소문자를 무시한 부분 일치이며, 결과는 생성일 내림차순입니다."""
        services.resources.create_resource(new_resource(
            submitter["id"], memberId="m1", memberHandle="alice", created="2024-01-01T00:00:00Z"))
        services.resources.create_resource(new_resource(
            submitter["id"], memberId="m2", memberHandle="Alicia", created="2024-03-01T00:00:00Z"))
        services.resources.create_resource(new_resource(
            submitter["id"], memberId="m3", memberHandle="bob", created="2024-02-01T00:00:00Z"))

        result = services.resources.search_resources({"memberHandle": "ALI", "includeRole": True})

        assert result["total"] == 2
        assert [r["memberHandle"] for r in result["result"]] == ["Alicia", "alice"]
        assert result["result"][0]["role"]["id"] == submitter["id"]
        assert result["result"][1]["created"] == "2024-01-01T00:00:00"


class TestResourcePhases:
    def test_add_phases_is_all_or_nothing(self, services, submitter, make_phase):
        registration = make_phase("Registration")
        submission = make_phase("Submission")
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        with pytest.raises(ServiceError) as exc_info:
            services.resource_phases.add_phases(resource["id"], [submission["id"], registration["id"]])

        assert exc_info.value.kind is ErrorKind.CONFLICT
        assert [p["name"] for p in services.resource_phases.list_phases(resource["id"])] == ["Registration"]

        added = services.resource_phases.add_phases(resource["id"], [submission["id"]], user_id="u2")
        assert [p["name"] for p in added] == ["Submission"]
        assert [p["name"] for p in services.resource_phases.list_phases(resource["id"])] == [
            "Registration", "Submission"
        ]

    def test_remove_phase(self, services, submitter, make_phase):
        registration = make_phase("Registration")
        review = make_phase("Review")
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        # 연결된 적 없는 단계
        with pytest.raises(ServiceError) as exc_info:
            services.resource_phases.remove_phase(resource["id"], review["id"])
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

        assert services.resource_phases.remove_phase(resource["id"], registration["id"]) is True
        assert services.resource_phases.list_phases(resource["id"]) == []

    def test_allow_list_limits_phases(self, services, submitter, make_phase):
        """허용 목록이 있는 역할은 목록에 있는 단계에만 연결될 수 있습니다."""
        registration = make_phase("Registration")
        review = make_phase("Review")
        services.role_phase_dependencies.create_dependency(
            {"roleId": submitter["id"], "phaseId": registration["id"], "createdBy": "u1"}
        )

        with pytest.raises(ServiceError) as exc_info:
            services.resources.create_resource(new_resource(submitter["id"], [review["id"]]))
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert services.resources.search_resources()["total"] == 0

        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))
        assert [p["id"] for p in resource["phases"]] == [registration["id"]]

    def test_role_change_rechecks_existing_phases(self, services, submitter, make_phase):
        registration = make_phase("Registration")
        review = make_phase("Review")
        reviewer = services.roles.create_role({"name": "Reviewer", "createdBy": "u1"})
        services.role_phase_dependencies.create_dependency(
            {"roleId": reviewer["id"], "phaseId": review["id"], "createdBy": "u1"}
        )
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        with pytest.raises(ServiceError) as exc_info:
            services.resources.update_resource(resource["id"], {"roleId": reviewer["id"]})

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert services.resources.get_resource(resource["id"])["roleId"] == submitter["id"]

        moved = services.resources.update_resource(resource["id"], {"roleId": reviewer["id"], "phases": [review["id"]]})
        assert moved["role"]["name"] == "Reviewer"
        assert [p["name"] for p in moved["phases"]] == ["Review"]


class TestReferenceData:
    def test_role_round_trip(self, services):
        created = services.roles.create_role({
            "name": "Copilot", "fullAccess": True, "selfObtainable": False,
            "createdBy": "u1", "legacyId": "14",
        })

        fetched = services.roles.get_role(created["id"])

        assert fetched == created
        assert fetched["legacyId"] == "14"

    def test_role_delete_blocked_while_referenced(self, services, submitter):
        resource = services.resources.create_resource(new_resource(submitter["id"]))

        with pytest.raises(ServiceError) as exc_info:
            services.roles.delete_role(submitter["id"])
        assert exc_info.value.kind is ErrorKind.CONFLICT

        services.resources.delete_resource(resource["id"])
        assert services.roles.delete_role(submitter["id"]) is True
        with pytest.raises(ServiceError) as exc_info:
            services.roles.get_role(submitter["id"])
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_role_delete_removes_its_dependencies(self, services, submitter, make_phase):
        registration = make_phase("Registration")
        services.role_phase_dependencies.create_dependency(
            {"roleId": submitter["id"], "phaseId": registration["id"], "phaseType": "Registration", "createdBy": "u1"}
        )
        assert services.role_phase_dependencies.search_dependencies({"roleId": submitter["id"]})["total"] == 1

        services.roles.delete_role(submitter["id"])

        assert services.role_phase_dependencies.search_dependencies({"roleId": submitter["id"]})["total"] == 0

    def test_phase_delete_blocked_while_attached(self, services, submitter, make_phase):
        registration = make_phase("Registration", "Sign up")
        resource = services.resources.create_resource(new_resource(submitter["id"], [registration["id"]]))

        with pytest.raises(ServiceError) as exc_info:
            services.phases.delete_phase(registration["id"])
        assert exc_info.value.kind is ErrorKind.CONFLICT

        services.resource_phases.remove_phase(resource["id"], registration["id"])
        assert services.phases.delete_phase(registration["id"]) is True

    def test_duplicate_names_conflict(self, services, submitter, make_phase):
        make_phase("Registration")

        with pytest.raises(ServiceError) as exc_info:
            services.roles.create_role({"name": "Submitter", "createdBy": "u2"})
        assert exc_info.value.kind is ErrorKind.CONFLICT

        with pytest.raises(ServiceError) as exc_info:
            make_phase("Registration")
        assert exc_info.value.kind is ErrorKind.CONFLICT

    def test_search_roles_sorted_and_paged(self, services):
        for name in ["Reviewer", "Approver", "Submitter", "Manager"]:
            services.roles.create_role({"name": name, "createdBy": "u1"})

        first = services.roles.search_roles({"perPage": 3})
        second = services.roles.search_roles({"page": 2, "perPage": 3})
        filtered = services.roles.search_roles({"name": "ER"})

        assert first["total"] == 4
        assert [r["name"] for r in first["result"]] == ["Approver", "Manager", "Reviewer"]
        assert [r["name"] for r in second["result"]] == ["Submitter"]
        assert [r["name"] for r in filtered["result"]] == ["Approver", "Manager", "Reviewer", "Submitter"]
