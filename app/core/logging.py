import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Настройка корневого логгера"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
