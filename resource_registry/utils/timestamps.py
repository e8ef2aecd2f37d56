# resource_registry/utils/timestamps.py
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """현재 UTC 시각 (DB 저장용으로 tzinfo를 제거한 값)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """입력으로 받은 시각을 UTC 기준 naive datetime으로 맞춥니다."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
