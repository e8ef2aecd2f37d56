import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from resource_registry.config import settings

logger = logging.getLogger(__name__)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 외래 키 검사를 켜야 CASCADE/RESTRICT가 동작합니다.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DataStore:
    """
    데이터베이스 엔진과 세션 팩토리를 묶은 저장소 핸들입니다.

    전역 엔진 대신 호스트 프로세스가 명시적으로 생성하고, open()/close()로
    생명주기를 관리합니다. 서비스는 이 핸들이 만든 세션 위에서 동작합니다.
    """

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        """
        DataStore를 초기화합니다. (아직 테이블은 만들지 않습니다.)

        Args:
            database_url: SQLAlchemy 연결 문자열. 생략하면 settings.DATABASE_URL을 사용합니다.
            echo: SQL 로그 출력 여부. 생략하면 settings.SQL_ECHO를 사용합니다.
        """
        self.database_url = database_url or settings.DATABASE_URL
        url = make_url(self.database_url)
        engine_kwargs = {"echo": settings.SQL_ECHO if echo is None else echo}

        self.is_sqlite = url.get_backend_name() == "sqlite"
        if self.is_sqlite:
            # connect_args는 SQLite에서만 필요합니다. (thread-safe 설정)
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # 인메모리 DB는 연결이 끊기면 사라지므로 하나의 연결을 공유합니다.
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.database_url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        # autoflush=False: 리포지토리가 필요한 시점에 명시적으로 flush 합니다.
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "DataStore":
        """모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)"""
        Base.metadata.create_all(bind=self.engine)
        self._opened = True
        logger.info("Data store opened (%s)", self.engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        """커넥션 풀을 정리합니다."""
        self.engine.dispose()
        self._opened = False
        logger.info("Data store closed")

    def new_session(self) -> Session:
        if not self._opened:
            raise RuntimeError("DataStore is not open. Call open() first.")
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """with 블록 동안 사용할 세션을 열고, 블록이 끝나면 닫습니다."""
        session = self.new_session()
        try:
            yield session
        finally:
            session.close()

    def __enter__(self) -> "DataStore":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
