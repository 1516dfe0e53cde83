from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from typing import Optional

from sportsnews.config import DISPLAY_TIMEZONE

DISPLAY_FORMAT = "%d/%m/%Y, %H:%M:%S"


def parse_iso(iso_ts: Optional[str]) -> Optional[datetime]:
    """Converte string ISO (com 'Z' ou offset) para datetime UTC."""
    if not iso_ts:
        return None
    try:
        dt = datetime.fromisoformat(iso_ts.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_to_local(dt_utc: datetime, tz_name: str = DISPLAY_TIMEZONE) -> datetime:
    """Converte datetime UTC para timezone local."""
    return dt_utc.astimezone(ZoneInfo(tz_name))


def to_local_str(dt_utc: Optional[datetime], tz_name: str = DISPLAY_TIMEZONE) -> str:
    if dt_utc is None:
        return ""
    return utc_to_local(dt_utc, tz_name).strftime(DISPLAY_FORMAT)

