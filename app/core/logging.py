"""Настройка логирования приложения.

Один раз конфигурирует корневой логгер; модули получают свои логгеры
через ``logging.getLogger(__name__)``.
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None) -> None:
    # basicConfig ничего не делает, если у корневого логгера уже есть обработчики
    logging.basicConfig(format=LOG_FORMAT, level=(level or settings.LOG_LEVEL).upper())
