"""Loguru sink setup for bridge services."""

import sys

from loguru import logger


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Replace loguru's default sink with a stderr sink tagged with the service name.

    Args:
        service_name: Name shown on every line (e.g. 'usdc-vault-arbitrum')
        level: Minimum level to emit
    """

    def patch_record(record):
        record["extra"]["service"] = service_name
        return True

    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | "
            "<cyan>{extra[service]}</cyan> | <white>{message}</white>"
        ),
        level=level,
        filter=patch_record,
        backtrace=False,
        diagnose=False,
    )
