"""애플리케이션 설정.

모든 값은 import 시점에 환경 변수에서 읽습니다. 테스트나 호스트 프로세스에서
다른 값을 쓰려면 이 모듈을 import 하기 전에 환경 변수를 지정하거나,
DataStore 등에 값을 직접 넘기면 됩니다.
"""

import os


class Settings:
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    LOG_FILE: str
    DEFAULT_PAGE_SIZE: int
    MAX_PAGE_SIZE: int

    def __init__(self):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///resource_registry.db")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in {"1", "true", "yes"}
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = os.getenv("LOG_FILE", "")
        self.DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
        self.MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
        self._validate()

    def _validate(self):
        if self.DEFAULT_PAGE_SIZE < 1:
            raise RuntimeError("DEFAULT_PAGE_SIZE must be a positive integer")
        if self.MAX_PAGE_SIZE < self.DEFAULT_PAGE_SIZE:
            raise RuntimeError("MAX_PAGE_SIZE must not be smaller than DEFAULT_PAGE_SIZE")


settings = Settings()
