# config logging
import logging, os, structlog, sys

def setup_logging(level: str = None):
    """JSON lines on stdout; LOG_LEVEL (default INFO) drops anything quieter."""
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    structlog.configure(
        processors=[structlog.processors.TimeStamper(fmt="iso"),
                    structlog.processors.add_log_level,
                    structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, name, logging.INFO)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )
    return structlog.get_logger()
