# catalog_nlp/utils/logging.py

import logging
import sys

from catalog_nlp.core.config import settings


def setup_logging(level: str | None = None, log_file: str | None = None):
    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_file = log_file or settings.LOG_FILE
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # gensim is chatty at INFO
    logging.getLogger("gensim").setLevel(logging.WARNING)

    logger.info("✅ Logging system initialized")
