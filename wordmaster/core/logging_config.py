"""Logging setup: quiet access logs for the endpoints the client polls."""

import logging
from typing import Optional, Tuple

# (method, path prefix) pairs whose successful requests are not logged.
# The review client refreshes the feed and decay status on a timer.
POLLED_ROUTES: Tuple[Tuple[str, str], ...] = (
    ("GET", "/api/feed"),
    ("GET", "/api/words/memory-decay-status"),
    ("GET", "/api/scheduler/status"),
    ("GET", "/api/healthz"),
    ("OPTIONS", "/api/"),
)


class SuppressPollingEndpointsFilter(logging.Filter):
    """Drops uvicorn.access records for 2xx responses on polled routes."""

    def filter(self, record: logging.LogRecord) -> bool:
        request = self._parse_access_args(record)
        if request is None:
            return True

        method, path, status_code = request
        if not 200 <= status_code < 300:
            return True

        return not any(
            method == polled_method and path.startswith(prefix)
            for polled_method, prefix in POLLED_ROUTES
        )

    @staticmethod
    def _parse_access_args(record: logging.LogRecord) -> Optional[Tuple[str, str, int]]:
        # uvicorn.access args: (client_addr, method, full_path, http_version, status_code)
        args = record.args
        if not isinstance(args, tuple) or len(args) != 5:
            return None

        _, method, full_path, _, status = args
        try:
            return str(method), str(full_path), int(status)
        except (TypeError, ValueError):
            return None


def configure_logging(level: int = logging.INFO) -> None:
    """Root format, polling suppression, and per-library levels."""
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    polling_filter = SuppressPollingEndpointsFilter()
    for handler in logging.getLogger("uvicorn.access").handlers:
        handler.addFilter(polling_filter)

    # Third-party chatter stays at WARNING
    for noisy in ("httpx", "apscheduler"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    # Engine decisions (decay skips, review bonuses) log at DEBUG
    logging.getLogger("wordmaster.services").setLevel(logging.DEBUG)

    logging.getLogger(__name__).info(
        f"Logging configured: {len(POLLED_ROUTES)} polled routes suppressed, engine logging verbose"
    )
