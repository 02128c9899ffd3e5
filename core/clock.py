"""Wall-clock helpers shared by the ledger, throttle and routes."""

import time
from datetime import datetime


def now_millis() -> int:
    """Current epoch time in integer milliseconds."""
    return int(time.time() * 1000)


def now_local() -> datetime:
    """Current local (store) time, naive."""
    return datetime.now()
