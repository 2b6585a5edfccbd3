"""Standard library logging setup for the scripts and third-party loggers.

Application code logs through logfire; this only configures what uvicorn
and alembic print.
"""

import logging
import sys

from gate.config import Settings


class SecretRedactingFilter(logging.Filter):
    """Replace configured secrets in log records with a placeholder.

    The bot token is part of every Bot API URL, so any library that logs a
    request URL would otherwise print it.
    """

    def __init__(self, secrets: list[str]) -> None:
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, "[redacted]")
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(settings: Settings) -> None:
    """Configure root logging.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(
        SecretRedactingFilter(
            [settings.telegram.bot_token or "", settings.webhook.secret_token or ""]
        )
    )
    logging.basicConfig(level=level, handlers=[handler], force=True)

    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("gate").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
