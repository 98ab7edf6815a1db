import logging
import os
import sys

from pythonjsonlogger import jsonlogger

# httpx logs full request URLs at INFO; attachment download URLs can embed
# pre-authorized access tokens.
_QUIET_LOGGERS = ["httpx", "httpcore", "websockets"]


def setup_logging(level: str | None = None):
    """
    Configures structured JSON logging for the gateway.

    Installs a single JSON stream handler (timestamp, level, logger name,
    message, trace_id, span_id) on the root logger and on the uvicorn loggers
    so request logs and application logs share one format. HTTP client and
    websocket libraries are capped at WARNING.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment variable,
            or INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)
    root_logger.handlers = [stream_handler]

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level_name)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
