"""
Logging utilities for the promotion engine.
"""
import logging

from promo_engine.logging.config import LoggingConfig
from promo_engine.logging.handlers import get_app_handler
from promo_engine.logging.filters import EvaluationContextFilter
from promo_engine.logging.slack_handler import slack_handler

_context_filter = EvaluationContextFilter()
slack_handler.addFilter(_context_filter)


def get_app_logger(name: str = "promo_engine"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        # central handler or local file handler per module
        handler = get_app_handler(name.replace('.', '_'))
        handler.addFilter(_context_filter)
        logger.addHandler(handler)
        logger.addHandler(slack_handler)
        logger.setLevel(getattr(logging, LoggingConfig.LOG_LEVEL, logging.INFO))
        logger.propagate = False
    return logger


def initialize_logging():
    is_valid, message = LoggingConfig.is_valid_config()
    logger = get_app_logger("promo_engine")
    if not is_valid:
        logger.warning(f"logging_config_invalid | reason={message}")
    logger.info("Logging system initialized (promo-engine)")
    return logger
