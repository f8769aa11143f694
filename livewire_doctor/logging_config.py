import logging
import sys
import structlog
from structlog.types import Processor


def configure_logging(log_level: str = "INFO", is_debug: bool = False, force: bool = False):
    """
    Configure structured logging for the application built by create_app().

    - In debug mode, it uses a human-readable console renderer.
    - In production, it uses a JSON renderer.

    A host that already configured structlog keeps its setup unless `force`
    is given; the extension itself only ever calls structlog.get_logger().
    """
    if structlog.is_configured() and not force:
        return False

    level = log_level.upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = structlog.dev.ConsoleRenderer(colors=True) if is_debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # No emoji in startup output: some Windows consoles still run cp1252.
    structlog.get_logger(__name__).info(
        "logging.configured",
        mode="console" if is_debug else "json",
        level=level,
    )
    return True
