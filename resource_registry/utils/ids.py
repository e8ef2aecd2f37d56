# resource_registry/utils/ids.py
import uuid


def generate_id() -> str:
    """전역적으로 고유한 식별자 문자열(UUID4)을 생성합니다."""
    return str(uuid.uuid4())
