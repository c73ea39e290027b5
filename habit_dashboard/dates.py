from datetime import date, datetime, timedelta


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def format_date(value):
    day = _as_date(value)
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def format_date_short(value):
    day = _as_date(value)
    return f"{day.strftime('%b')} {day.day}"


def date_string(value):
    return _as_date(value).isoformat()


def is_same_day(first, second):
    return _as_date(first) == _as_date(second)


def last_n_days(n, today=None):
    today = _as_date(today) if today is not None else date.today()
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]
