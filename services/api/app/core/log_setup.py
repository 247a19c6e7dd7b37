# services/api/app/core/log_setup.py

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """按 LOG_LEVEL 配置根 logger；uvicorn 自己的 logger 不动。"""
    lvl = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logging.getLogger().setLevel(lvl)
    # httpx 在 INFO 级别会打印每个请求的 URL，这里压低
    logging.getLogger("httpx").setLevel(logging.WARNING)
