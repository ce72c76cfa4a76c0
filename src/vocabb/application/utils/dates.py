from datetime import datetime, timedelta


def start_of_day(moment: datetime) -> datetime:
    """Truncate a timestamp to local midnight of the same day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def days_after(moment: datetime, days: int) -> datetime:
    return start_of_day(moment) + timedelta(days=days)
