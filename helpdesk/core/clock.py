"""Wall-clock helpers in the configured timezone."""

from datetime import datetime

import pytz

from helpdesk.config import get_settings


def now() -> datetime:
    """Current local time in ``TIMEZONE``, naive, as stored in the database."""
    tz = pytz.timezone(get_settings().TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def today_start() -> datetime:
    return now().replace(hour=0, minute=0, second=0, microsecond=0)
