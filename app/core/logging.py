# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path

from app.core.config import settings


def setup_logging():
    """로깅 설정"""
    log_level = logging.DEBUG if settings.environment == "development" else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # 프로덕션에서는 제출/채점 이력을 파일로도 남김
    if settings.environment == "production":
        log_dir = Path("/app/logs")
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    # SQL 에코는 개발 환경에서도 너무 시끄러움
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
