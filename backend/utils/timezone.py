from datetime import datetime, date
import os

import pytz
from dotenv import load_dotenv

load_dotenv()

# All timestamps are stored timezone-aware in the business timezone
APP_TIMEZONE = pytz.timezone(os.getenv("APP_TIMEZONE", "Asia/Kolkata"))


def now() -> datetime:
    return datetime.now(APP_TIMEZONE)


def today() -> date:
    """Current business date, used as the default anchor for dashboards and reports."""
    return now().date()
