"""Unit tests for per-category log levels."""

import logging

from newsroom.config import Settings
from newsroom.infrastructure.logging.log_config import setup_logging


def test_category_levels_are_applied():
    settings = Settings(_env_file=None, log_level="INFO", log_level_sql="debug", log_level_auth="WARNING")

    levels = setup_logging(settings)

    assert levels["sql"] == logging.DEBUG
    assert levels["auth"] == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG
    assert logging.getLogger("newsroom.application.services.auth_service").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    levels = setup_logging(Settings(_env_file=None, log_level_content="LOUD"))
    assert levels["content"] == logging.INFO
    assert logging.getLogger("newsroom.application.services.article_service").level == logging.INFO
