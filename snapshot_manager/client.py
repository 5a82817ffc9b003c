# Simple client to trigger snapshots on a running snapshot manager
from __future__ import annotations

from dataclasses import dataclass

import requests

DEFAULT_URL = "http://localhost:7877"


@dataclass(frozen=True)
class TriggerResult:
    status_code: int
    message: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def trigger_url(volume: str, base_url: str = DEFAULT_URL) -> str:
    # The server reads the raw query, so the volume is not sent as key=value.
    return f"{base_url.rstrip('/')}/?{volume}"


def trigger_snapshot(volume: str, base_url: str = DEFAULT_URL, timeout: float | None = None) -> TriggerResult:
    r = requests.get(trigger_url(volume, base_url), timeout=timeout)
    return TriggerResult(status_code=r.status_code, message=r.text.strip())
