"""Request logging for the API."""

import logging
import sys
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from core.config import LOG_LEVEL

logger = logging.getLogger("api.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up root logging once for the API process."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    district_id: str | None = None
    language: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    days_returned: int | None = None
    events_generated: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog) -> None:
    """Emit one summary line per request; errors at WARNING."""
    level = logging.INFO if log.status_code < 400 else logging.WARNING
    fields = {k: v for k, v in asdict(log).items() if v not in (None, [], "")}
    logger.log(
        level,
        "%s %s -> %s (%dms) %s",
        log.method,
        log.endpoint,
        log.status_code,
        log.processing_time_ms,
        fields,
    )
