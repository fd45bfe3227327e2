from datetime import datetime
from pytz import timezone

from moneyball.config import APP_TIMEZONE

# Application timezone constant
APP_TZ = timezone(APP_TIMEZONE)

def get_current_time() -> datetime:
    """Get current time in the application timezone."""
    return datetime.now(APP_TZ)
