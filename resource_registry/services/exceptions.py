# resource_registry/services/exceptions.py
from enum import Enum


class ErrorKind(Enum):
    """
    서비스 계층에서 발생하는 오류의 분류입니다.
    각 분류는 API 계층에서 사용할 HTTP 상태 코드를 함께 가집니다.
    """
    BAD_REQUEST = ("BadRequest", 400)   # 요청에 포함된 참조(예: roleId)가 존재하지 않을 때
    NOT_FOUND = ("NotFound", 404)       # 엔티티 또는 의존 엔티티(역할/단계/연결)가 없을 때
    CONFLICT = ("Conflict", 409)        # 고유성 위반 또는 참조 중이라 삭제할 수 없을 때
    VALIDATION = ("Validation", 400)    # 필수 필드/타입 검증 실패 (DB 접근 전)

    def __init__(self, label: str, http_status: int):
        self.label = label
        self.http_status = http_status


class ServiceError(Exception):
    """오류 분류(kind)와 메시지를 함께 담는 단일 서비스 예외"""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_dict(self):
        return {"error": self.kind.label, "message": self.message}

    def __repr__(self):
        return f"ServiceError({self.kind.label}, {self.message!r})"


# --- 생성 헬퍼 ---
def bad_request(message: str) -> ServiceError:
    return ServiceError(ErrorKind.BAD_REQUEST, message)

def not_found(message: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)

def conflict(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)

def validation(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)
