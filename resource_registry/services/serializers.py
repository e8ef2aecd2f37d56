# resource_registry/services/serializers.py
from datetime import datetime
from typing import Any, Dict, Optional

from resource_registry.database import models


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def role_to_dict(role: models.Role) -> Dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "fullAccess": role.full_access,
        "selfObtainable": role.self_obtainable,
        "created": _iso(role.created),
        "createdBy": role.created_by,
        "updated": _iso(role.updated),
        "updatedBy": role.updated_by,
        "legacyId": role.legacy_id,
    }


def role_summary(role: models.Role) -> Dict[str, Any]:
    """리소스 응답에 포함되는 역할 요약"""
    return {
        "id": role.id,
        "name": role.name,
        "fullAccess": role.full_access,
        "selfObtainable": role.self_obtainable,
    }


def phase_to_dict(phase: models.Phase) -> Dict[str, Any]:
    return {
        "id": phase.id,
        "name": phase.name,
        "description": phase.description,
        "created": _iso(phase.created),
        "createdBy": phase.created_by,
        "updated": _iso(phase.updated),
        "updatedBy": phase.updated_by,
    }


def phase_summary(phase: models.Phase) -> Dict[str, Any]:
    """리소스에 연결된 단계 요약"""
    return {"id": phase.id, "name": phase.name, "description": phase.description}


def resource_to_dict(resource: models.Resource, include_role: bool = False,
                     include_phases: bool = False) -> Dict[str, Any]:
    """
    리소스 모델을 API 응답 형태로 변환합니다.
    include_role / include_phases가 True일 때만 role, phases 키를 추가합니다.
    phases는 단계 이름 오름차순으로 정렬됩니다.
    """
    result = {
        "id": resource.id,
        "challengeId": resource.challenge_id,
        "memberId": resource.member_id,
        "memberHandle": resource.member_handle,
        "roleId": resource.role_id,
        "created": _iso(resource.created),
        "createdBy": resource.created_by,
        "updated": _iso(resource.updated),
        "updatedBy": resource.updated_by,
        "legacyId": resource.legacy_id,
    }
    if include_role and resource.role is not None:
        result["role"] = role_summary(resource.role)
    if include_phases:
        phases = [rp.phase for rp in resource.resource_phases]
        result["phases"] = [phase_summary(p) for p in sorted(phases, key=lambda p: p.name)]
    return result


def dependency_to_dict(dependency: models.RolePhaseDependency) -> Dict[str, Any]:
    return {
        "id": dependency.id,
        "roleId": dependency.role_id,
        "phaseId": dependency.phase_id,
        "phaseType": dependency.phase_type,
        "created": _iso(dependency.created),
        "createdBy": dependency.created_by,
        "updated": _iso(dependency.updated),
        "updatedBy": dependency.updated_by,
    }
