"""
Time formatting utilities for human-readable output.
"""

from datetime import datetime, timezone

UNKNOWN = "unknown"

NS_PER_MS = 1_000_000
NS_PER_S = 1_000 * NS_PER_MS
NS_PER_MIN = 60 * NS_PER_S


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def format_elapsed_ns(ns) -> str:
    """
    Format an elapsed nanosecond count as a compound duration.
    
    Leading zero-valued units are omitted; the nanosecond field is always shown
    once a larger unit has been printed, and on its own for values under 1ms.
    
    Args:
        ns: Non-negative duration in nanoseconds
        
    Returns:
        Formatted duration (e.g., "20ns", "1s0ms5ns", "14m10s746ms266486ns"),
        or "unknown" for missing, negative or non-integer input
    """
    if not _is_int(ns) or ns < 0:
        return UNKNOWN
    
    minutes, rest = divmod(ns, NS_PER_MIN)
    seconds, rest = divmod(rest, NS_PER_S)
    millis, nanos = divmod(rest, NS_PER_MS)
    
    parts = []
    for amount, unit in ((minutes, 'm'), (seconds, 's'), (millis, 'ms')):
        if amount or parts:
            parts.append(f"{amount}{unit}")
    parts.append(f"{nanos}ns")
    return ''.join(parts)


def format_real_ns(ns) -> str:
    """
    Format nanoseconds since the Unix epoch as a UTC ISO-8601 string.
    
    Args:
        ns: Wall-clock time in nanoseconds since the epoch
        
    Returns:
        Formatted time (e.g., "2022-06-20T12:12:05.377266486"),
        or "unknown" for missing or out-of-range input
    """
    if not _is_int(ns):
        return UNKNOWN
    
    seconds, nanos = divmod(ns, NS_PER_S)
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{nanos:09d}"
