"""
서비스 입력 검증용 Pydantic 모델.

외부 계약은 camelCase 필드 이름(fullAccess, createdBy ...)을 사용하므로
alias_generator로 snake_case 속성과 연결합니다. 알 수 없는 필드는 거부합니다.
"""

from datetime import datetime
from typing import Annotated, Any, List, Mapping, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from resource_registry.config import settings
from resource_registry.services.exceptions import validation

SchemaT = TypeVar("SchemaT", bound=BaseModel)

NonEmptyStr = Annotated[str, Field(min_length=1)]


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


def _reject_duplicates(values: Optional[List[UUID]]) -> Optional[List[UUID]]:
    if values is not None and len(set(values)) != len(values):
        raise ValueError("phase ids must not contain duplicates")
    return values


# --- Role ---
class RoleCreate(_Schema):
    id: Optional[UUID] = None
    name: NonEmptyStr
    full_access: bool = False
    self_obtainable: bool = False
    created: Optional[datetime] = None
    created_by: NonEmptyStr
    updated: Optional[datetime] = None
    updated_by: Optional[str] = None
    legacy_id: Optional[str] = None


class RoleUpdate(_Schema):
    name: Optional[str] = Field(None, min_length=1)
    full_access: Optional[bool] = None
    self_obtainable: Optional[bool] = None
    updated_by: Optional[str] = None
    legacy_id: Optional[str] = None


# --- Phase ---
class PhaseCreate(_Schema):
    id: Optional[UUID] = None
    name: NonEmptyStr
    description: Optional[str] = None
    created: Optional[datetime] = None
    created_by: NonEmptyStr
    updated: Optional[datetime] = None
    updated_by: Optional[str] = None


class PhaseUpdate(_Schema):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    updated_by: Optional[str] = None


# --- Resource ---
class ResourceCreate(_Schema):
    id: Optional[UUID] = None
    challenge_id: Optional[str] = Field(None, min_length=1)
    member_id: Optional[str] = Field(None, min_length=1)
    member_handle: Optional[str] = None
    role_id: NonEmptyStr
    created: Optional[datetime] = None
    created_by: NonEmptyStr
    updated: Optional[datetime] = None
    updated_by: Optional[str] = None
    legacy_id: Optional[str] = None
    phases: Optional[List[UUID]] = None

    @field_validator("phases")
    @classmethod
    def unique_phases(cls, value):
        return _reject_duplicates(value)

    @model_validator(mode="after")
    def require_challenge_or_member(self):
        if not self.challenge_id and not self.member_id:
            raise ValueError("Either challengeId or memberId must be provided")
        return self


class ResourceUpdate(_Schema):
    challenge_id: Optional[str] = None
    member_id: Optional[str] = None
    member_handle: Optional[str] = None
    role_id: Optional[str] = Field(None, min_length=1)
    updated_by: Optional[str] = None
    legacy_id: Optional[str] = None
    phases: Optional[List[UUID]] = None

    @field_validator("phases")
    @classmethod
    def unique_phases(cls, value):
        return _reject_duplicates(value)


class PhaseIdList(_Schema):
    phase_ids: List[UUID] = Field(min_length=1)

    @field_validator("phase_ids")
    @classmethod
    def unique_phase_ids(cls, value):
        return _reject_duplicates(value)


# --- RolePhaseDependency ---
class RolePhaseDependencyCreate(_Schema):
    id: Optional[UUID] = None
    role_id: NonEmptyStr
    phase_id: NonEmptyStr
    phase_type: Optional[str] = None
    created_by: NonEmptyStr


# --- Search criteria ---
class _SearchCriteria(_Schema):
    page: int = Field(1, ge=1)
    per_page: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

    @field_validator("per_page")
    @classmethod
    def cap_per_page(cls, value: int) -> int:
        if value > settings.MAX_PAGE_SIZE:
            raise ValueError(f"perPage must not exceed {settings.MAX_PAGE_SIZE}")
        return value


class RoleSearch(_SearchCriteria):
    name: Optional[str] = None
    full_access: Optional[bool] = None
    self_obtainable: Optional[bool] = None


class PhaseSearch(_SearchCriteria):
    name: Optional[str] = None


class ResourceSearch(_SearchCriteria):
    challenge_id: Optional[str] = None
    member_id: Optional[str] = None
    member_handle: Optional[str] = None
    role_id: Optional[str] = None
    legacy_id: Optional[str] = None
    include_role: bool = False
    include_phases: bool = False


class RolePhaseDependencySearch(_SearchCriteria):
    role_id: Optional[str] = None
    phase_id: Optional[str] = None
    phase_type: Optional[str] = None


def parse(schema: Type[SchemaT], data: Optional[Mapping[str, Any]], label: str) -> SchemaT:
    """
    입력 딕셔너리를 검증하여 스키마 객체로 변환합니다.

    Raises:
        ServiceError(VALIDATION): 필수 필드 누락, 타입 오류, 알 수 없는 필드가 있을 때.
    """
    try:
        return schema.model_validate(dict(data or {}))
    except ValidationError as e:
        raise validation(f"Invalid {label} data: {_summarize(e)}") from e


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
