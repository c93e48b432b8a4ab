from datetime import datetime
import pytz

UTC = pytz.UTC


def now_iso():
    """
    Returns the current UTC timestamp in ISO 8601, the format PostgREST
    accepts for timestamptz columns (e.g. comment_datetime).
    """
    return datetime.now(UTC).isoformat()
