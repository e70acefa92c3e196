# lang_mustache/logging_setup.py
"""
structlog setup for lang_mustache.

Library modules log through ``get_logger``, which always backs the structlog
logger with the stdlib logger of the same name. Until a caller configures
logging, the ``lang_mustache`` logger only has a NullHandler, so compiling
and rendering print nothing. The CLI calls ``configure_logging`` to send
records to stderr.
"""
import logging
import sys
import structlog

PACKAGE_LOGGER_NAME = "lang_mustache"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

def get_logger(name: str):
    # structlog front end on top of the stdlib logger, so stdlib levels and handlers apply.
    return structlog.wrap_logger(logging.getLogger(name))

def configure_logging(log_level_str: str = "warning"):
    # configures structlog for console-friendly, structured logging on stderr.
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    )

    # rendered output goes to stdout, so logs stay on stderr.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)

    get_logger(__name__).info("logging_configured", level=log_level_str)
