from datetime import datetime, timezone
import time

_STARTED_AT = time.monotonic()


def get_health_status() -> dict:
    """Liveness payload: process uptime in seconds plus the current UTC time."""
    return {
        "status": "ok",
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
