from __future__ import annotations

import logging
import time

from flask import Flask, request
from werkzeug.exceptions import MethodNotAllowed, NotFound

from . import metrics
from .snapshotter import SnapshotError, Snapshotter
from .whitelist import VolumeWhitelist

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Snapshot successful."
FAILURE_MESSAGE = "Snapshot failed."
BAD_REQUEST_MESSAGE = "Check documentation for instructions."

TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}

ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _bad_request():
    metrics.snapshot_requests_total.labels(outcome="bad_request").inc()
    return BAD_REQUEST_MESSAGE, 400, TEXT_HEADERS


def create_app(whitelist: VolumeWhitelist, snapshotter: Snapshotter) -> Flask:
    # No static route: every path belongs to the trigger.
    app = Flask(__name__, static_folder=None)
    # Must be set before rules are added; "//" would otherwise be redirected.
    app.url_map.merge_slashes = False

    def trigger_snapshot():
        query = request.query_string.decode("utf-8", errors="replace")
        if not query:
            logger.debug("Request without query encountered.")
            return _bad_request()

        logger.info(f"Request query: {query}")
        volume = query.strip()
        if not whitelist.is_allowed(volume):
            return _bad_request()

        try:
            snapshotter.perform(volume)
        except SnapshotError as e:
            logger.error(f"Snapshot of {volume} failed: {e}")
            metrics.snapshot_requests_total.labels(outcome="failed").inc()
            metrics.snapshot_failures_total.labels(reason=e.reason).inc()
            return FAILURE_MESSAGE, 500, TEXT_HEADERS

        metrics.snapshot_requests_total.labels(outcome="ok").inc()
        metrics.snapshot_last_success_timestamp.labels(volume=volume).set(time.time())
        return SUCCESS_MESSAGE, 200, TEXT_HEADERS

    # -----------------------------
    # Trigger Endpoint
    # -----------------------------
    # Any path and any method is accepted; only the raw query string counts.
    @app.route("/", defaults={"path": ""}, methods=ROUTED_METHODS, strict_slashes=False)
    @app.route("/<path:path>", methods=ROUTED_METHODS, strict_slashes=False)
    def api_trigger_snapshot(path):
        return trigger_snapshot()

    # Methods and paths the url map does not know (TRACE, "//") land here.
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def api_unrouted(e):
        return trigger_snapshot()

    return app
