import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from resource_registry.repositories.interfaces import IUnitOfWork
from resource_registry.services.exceptions import ServiceError, conflict, not_found

logger = logging.getLogger(__name__)


def translate_integrity_error(error: IntegrityError) -> ServiceError:
    """
    DB 제약 조건 위반을 서비스 오류 분류로 변환합니다.

    - 외래 키 위반 + DELETE: 아직 참조 중인 행을 지우려 함 -> Conflict
    - 외래 키 위반 + INSERT/UPDATE: 참조 대상이 없음 -> NotFound
    - 그 외 (UNIQUE 등): Conflict
    """
    detail = str(error.orig)
    statement = (error.statement or "").lstrip().upper()
    if "foreign key" in detail.lower():
        if statement.startswith("DELETE"):
            return conflict(f"Entity is still referenced by other records: {detail}")
        return not_found(f"Referenced entity does not exist: {detail}")
    return conflict(f"Unique constraint violated: {detail}")


class SqlalchemyUnitOfWork(IUnitOfWork):
    """
    세션 하나에 대한 트랜잭션 경계입니다.
    중첩된 with 블록은 가장 바깥 블록이 끝날 때 한 번만 커밋/롤백합니다.
    """

    def __init__(self, db_session: Session):
        self.db = db_session
        self._depth = 0

    def __enter__(self) -> "SqlalchemyUnitOfWork":
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._depth -= 1
        if self._depth > 0:
            return False

        if exc_type is None:
            self.commit()
            return False

        self.rollback()
        logger.warning("Transaction rolled back: %s", exc_val)
        if isinstance(exc_val, IntegrityError):
            raise translate_integrity_error(exc_val) from exc_val
        return False

    def commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Commit failed, transaction rolled back: %s", e.orig)
            raise translate_integrity_error(e) from e

    def rollback(self):
        self.db.rollback()
