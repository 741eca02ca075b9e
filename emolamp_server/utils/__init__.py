from .coercion import as_mapping, coerce_int, coerce_str, leading_int
from .responses import error_response
from .timezones import (
    UTC,
    hour_of,
    local_datetime,
    now_ms,
    resolve_timezone,
    start_of_day_ms,
)

__all__ = [
    "as_mapping",
    "coerce_int",
    "coerce_str",
    "error_response",
    "leading_int",
    "UTC",
    "hour_of",
    "local_datetime",
    "now_ms",
    "resolve_timezone",
    "start_of_day_ms",
]
