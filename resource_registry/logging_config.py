"""
로깅 기본 설정.

``setup_logging`` 은 루트 로거에 콘솔 핸들러와 (선택적으로) 파일 핸들러를
붙입니다. 이미 핸들러가 있으면 아무것도 하지 않으므로 여러 번 호출해도 됩니다.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """
    루트 로거를 설정합니다.

    Args:
        level: 로그 레벨 이름 (예: "DEBUG", "INFO"). 대소문자 구분 없음.
        logfile: 로그를 기록할 파일 경로. 비어 있으면 파일 핸들러를 붙이지 않습니다.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
