from __future__ import annotations

import logging

from prometheus_client import Counter, Gauge, start_http_server

logger = logging.getLogger(__name__)

# -----------------------------
# Prometheus Metrics (GLOBAL)
# -----------------------------
snapshot_requests_total = Counter(
    "snapshot_requests_total",
    "Snapshot requests handled, by outcome",
    ["outcome"],
)

snapshot_failures_total = Counter(
    "snapshot_failures_total",
    "Snapshot attempts that failed, by reason",
    ["reason"],
)

snapshot_last_success_timestamp = Gauge(
    "snapshot_last_success_timestamp",
    "Unix timestamp of the last successful snapshot",
    ["volume"],
)

snapshot_whitelist_size = Gauge(
    "snapshot_whitelist_size",
    "Number of volumes in the loaded whitelist",
)


def start_exporter(port: int, host: str = "localhost") -> None:
    """Serves /metrics on a separate port so the trigger surface stays a catch-all."""
    start_http_server(port, addr=host)
    logger.info(f"Metrics exporter listening on {host}:{port}")
