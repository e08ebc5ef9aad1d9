import logging
import sys
from typing import Iterable

from investor_portal.utils.logging_redaction import install_redaction_filter

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# httpx logs full request URLs, including magic-link tokens
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(level: str = "INFO", quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    Configure stdout logging for the portal and scrub secrets from every record.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    install_redaction_filter()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
