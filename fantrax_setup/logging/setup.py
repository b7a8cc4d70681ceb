import sys
import logging
from typing import Any

from loguru import logger

from fantrax_setup.config.settings import settings

MASK = "********"


def mask_secret(value: str) -> str:
    """Masks a secret, keeping a short prefix and suffix when it is long enough."""
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return MASK


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask the session cookie in log records."""
    sensitive_keys = ["cookie", "token", "password", "secret"]

    extra = record.get("extra")
    if isinstance(extra, dict):
        for extra_key, extra_value in list(extra.items()):
            if any(sk in extra_key.lower() for sk in sensitive_keys):
                extra[extra_key] = (
                    mask_secret(extra_value) if isinstance(extra_value, str) else MASK
                )

    # The raw cookie header must never reach a sink, whatever the message
    cookie = settings.fantrax_cookies
    if cookie and cookie in record["message"]:
        record["message"] = record["message"].replace(cookie, MASK)

    return True


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,  # Locals may hold the cookie header
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx, httpcore)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug("Standard logging intercepted.")
