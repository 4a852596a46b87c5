"""TTL resolution shared by every cache backend.

A TTL is either None (never expires), a number of seconds as an
int, or a ``datetime.timedelta``. Backends that persist an absolute
instant use ``resolve_expires_at``; backends whose storage expires
keys natively use ``resolve_seconds``.
"""

from datetime import datetime, timedelta, timezone

Ttl = int | timedelta | None


def _check_ttl(ttl: object) -> None:
    if ttl is None or isinstance(ttl, timedelta):
        return
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise TypeError(
            f"TTL must be None, an int or a timedelta, not {type(ttl).__name__}"
        )


def resolve_expires_at(ttl: Ttl, now: float) -> float | None:
    """Convert a TTL to an absolute expiry timestamp.

    Args:
        ttl: The caller-supplied TTL.
        now: Current time as epoch seconds.

    Returns:
        Epoch seconds at which the entry expires, or None for no expiry.
        A non-positive TTL resolves to ``now`` (expire immediately).
    """
    _check_ttl(ttl)
    if ttl is None:
        return None

    if isinstance(ttl, timedelta):
        started = datetime.fromtimestamp(now, tz=timezone.utc)
        return (started + ttl).timestamp()

    if ttl <= 0:
        return now
    return now + ttl


def resolve_seconds(ttl: Ttl, now: float) -> int | None:
    """Convert a TTL to whole seconds from now.

    Args:
        ttl: The caller-supplied TTL.
        now: Current time as epoch seconds.

    Returns:
        Seconds until expiry, or None for no expiry. Zero or less
        means the entry should be deleted.
    """
    _check_ttl(ttl)
    if ttl is None:
        return None

    if isinstance(ttl, timedelta):
        started = datetime.fromtimestamp(now, tz=timezone.utc)
        return int(((started + ttl) - started).total_seconds())

    return ttl


def is_expired(expires_at: float | None, now: float) -> bool:
    """Check whether an absolute expiry instant has passed."""
    return expires_at is not None and expires_at <= now
