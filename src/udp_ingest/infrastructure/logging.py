import structlog
import logging
import sys

_CONSOLE_ENVS = ("local", "development")


def setup_logging(env: str, level: str = "INFO") -> None:
    """
    Configure structlog based on environment.
    """
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
    ]

    if env in _CONSOLE_ENVS:
        # Development: Colored Console
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        # Production: JSON
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard logging to redirect to structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
