"""Structured logging for the members site."""

import logging
from typing import Union

from pythonjsonlogger import jsonlogger


def setup_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach a JSON stream handler to the root logger, once."""
    logger = logging.getLogger()
    if any(getattr(h, '_members_json', False) for h in logger.handlers):
        logger.setLevel(level)
        return
    logHandler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                                         rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logHandler._members_json = True     # type: ignore
    logger.addHandler(logHandler)
    logger.setLevel(level)
