# medcrypt/log.py
import sys
import logging
import structlog

# -----------------------------
# Logging
# -----------------------------
# Library loggers sit on top of stdlib loggers named after the module, so the
# host application's logging levels and handlers decide what gets emitted.
# Without any setup only warnings and above reach stderr.
def get_logger(name: str):
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)

def configure_logging(verbose: bool = False):
    logging.basicConfig(format="%(message)s", stream=sys.stderr,
                        level=logging.DEBUG if verbose else logging.WARNING)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
