"""Production Time implementation."""

import time
from datetime import datetime

from pullreq.gateway.time.abc import Time


class RealTime(Time):
    """Time backed by the system clock."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def now(self) -> datetime:
        return datetime.now()
