#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

import logging
import sys
from typing import TextIO

from pythonjsonlogger import jsonlogger
import structlog
from structlog.contextvars import merge_contextvars

from ipamservicelayer.utils.date import utcnow


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record: logging.LogRecord, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["logger"] = f"{record.name}:{record.lineno}"
        log_record["level"] = record.levelname
        if not log_record.get("timestamp"):
            log_record["timestamp"] = utcnow().strftime(
                "%Y-%m-%dT%H:%M:%S.%fZ"
            )


def configure_logging(
    level=logging.INFO,
    query_level=logging.WARNING,
    stream: TextIO = sys.stdout,
):
    """Render every log line as JSON on `stream`.

    Third party loggers (uvicorn, sqlalchemy) go through the same JSON
    handler. SQL statements are logged at `query_level`.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            # "event" becomes "msg" and the rest is passed as a dict in
            # "extra", which the JSON formatter renders as fields.
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(CustomJsonFormatter())
    root_logger = logging.getLogger()
    # Configuring twice must not duplicate every line.
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, CustomJsonFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(query_level)
    logging.getLogger("sqlalchemy.pool").setLevel(query_level)
