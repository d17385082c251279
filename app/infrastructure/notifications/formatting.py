"""Text formatting for notification messages.

Pure functions shared by every channel: durations, byte volumes, Slack
mrkdwn links, job descriptions, and the catalog diff summary.

The catalog diff summary is compared byte-for-byte by consumers, so its
ordering is defined only by explicit sort keys, never by input order.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from infrastructure.notifications.catalog import (
    CatalogDiff,
    FieldTransform,
    FieldTransformType,
    StreamTransform,
    StreamTransformType,
)

VOLUME_UNITS = ("B", "kB", "MB", "GB")

ADD_GLYPH = "＋"
REMOVE_GLYPH = "－"
UPDATE_GLYPH = "～"
BULLET = "•"

FIELD_GLYPHS = {
    FieldTransformType.ADD_FIELD: ADD_GLYPH,
    FieldTransformType.REMOVE_FIELD: REMOVE_GLYPH,
    FieldTransformType.UPDATE_FIELD_SCHEMA: UPDATE_GLYPH,
}

# Structural changes (add, remove) are listed before type changes
FIELD_KIND_PRIORITY = {
    FieldTransformType.ADD_FIELD: 0,
    FieldTransformType.REMOVE_FIELD: 1,
    FieldTransformType.UPDATE_FIELD_SCHEMA: 2,
}


def _split(value: int, unit: int) -> Tuple[int, int]:
    """Quotient and remainder, both truncated toward zero."""
    quotient, remainder = divmod(abs(value), unit)
    if value < 0:
        return -quotient, -remainder
    return quotient, remainder


def format_duration(start: datetime, end: datetime) -> str:
    """Render the time between two instants using its two coarsest units.

    Examples: ``"42 sec"``, ``"3 min 5 sec"``, ``"2 hours 0 min"``,
    ``"1 days 4 hours"``. An end before the start renders the negative
    duration as-is instead of raising.

    Args:
        start: Start instant
        end: End instant

    Returns:
        Human-readable duration
    """
    total_seconds = int((end - start).total_seconds())
    total_minutes, seconds = _split(total_seconds, 60)
    total_hours, minutes = _split(total_minutes, 60)
    days, hours = _split(total_hours, 24)

    if total_minutes == 0:
        return f"{seconds} sec"
    if total_hours == 0:
        return f"{minutes} min {seconds} sec"
    if days == 0:
        return f"{hours} hours {minutes} min"
    return f"{days} days {hours} hours"


def format_volume(num_bytes: int) -> str:
    """Render a byte count with binary (1024-based) units.

    Each step truncates, so 1536 bytes is ``"1 kB"``. Anything past GB is
    expressed in TB without further units.
    """
    current = num_bytes
    for unit in VOLUME_UNITS:
        if current < 1024:
            return f"{current} {unit}"
        current = current // 1024
    return f"{current} TB"


def format_duration_words(total_seconds: int) -> str:
    """Render a duration as words, e.g. ``"1 hour 0 minutes 5 seconds"``.

    Leading and trailing zero units are dropped; zero units between
    non-zero ones are kept. A zero duration is ``"0 seconds"``.
    """
    total_seconds = max(int(total_seconds), 0)
    total_minutes, seconds = divmod(total_seconds, 60)
    total_hours, minutes = divmod(total_minutes, 60)
    days, hours = divmod(total_hours, 24)

    parts = [(days, "day"), (hours, "hour"), (minutes, "minute"), (seconds, "second")]
    non_zero = [index for index, (value, _) in enumerate(parts) if value]
    if not non_zero:
        return "0 seconds"

    words = []
    for value, unit in parts[non_zero[0] : non_zero[-1] + 1]:
        words.append(f"{value} {unit}" if value == 1 else f"{value} {unit}s")
    return " ".join(words)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def describe_job(
    started_at: datetime,
    updated_at: datetime,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Describe when a sync started and how long it has been running.

    Used in connection auto-disable messages. A job whose update time equals
    its start time is still running, so ``now`` is used as the end.

    Args:
        started_at: When the job started
        updated_at: When the job last changed state
        reason: Optional failure reason appended as ", as the <reason>"
        now: Current time (defaults to the system clock)

    Returns:
        e.g. ``"sync started on Monday, January 01, 2024 at 10:00:00 AM UTC,
        running for 2 hours 30 minutes, as the source was unreachable."``
    """
    started = _as_utc(started_at)
    updated = _as_utc(updated_at)
    if updated == started:
        updated = _as_utc(now or datetime.now(timezone.utc))

    duration = format_duration_words(int((updated - started).total_seconds()))
    suffix = f", as the {reason}" if reason else ""
    started_text = started.strftime("%A, %B %d, %Y at %I:%M:%S %p %Z")
    return f"sync started on {started_text}, running for {duration}{suffix}."


def create_link(name: str, url: str) -> str:
    """Slack mrkdwn link ``<url|name>``."""
    return f"<{url}|{name}>"


def _stream_sort_key(transform: StreamTransform) -> Tuple:
    fields = tuple(_field_sort_key(f) for f in transform.update_stream)
    return (transform.stream_descriptor.fully_qualified_name, tuple(sorted(fields)))


def _field_sort_key(transform: FieldTransform) -> Tuple[int, str]:
    return (FIELD_KIND_PRIORITY[transform.transform_type], transform.field_path)


def _streams_of(diff: CatalogDiff, kind: StreamTransformType) -> List[StreamTransform]:
    return sorted(
        (t for t in diff.transforms if t.transform_type == kind),
        key=_stream_sort_key,
    )


def summarize_catalog_diff(diff: CatalogDiff) -> str:
    """Render a catalog diff as an ordered, line-oriented summary.

    Layout::

         • Streams (+1/-1)
           ＋ public.users
           － public.orders
         • Fields (+1/~1/-0)
           • public.accounts
             ＋ email
             ～ balance

    Added and removed streams, and updated streams, are each sorted by
    fully-qualified name. Field changes inside a stream are ordered by kind
    (add, remove, update) and then by dotted path. An empty diff renders as
    an empty string.

    Args:
        diff: Catalog diff to summarize

    Returns:
        Summary text, every line terminated by a newline
    """
    lines: List[str] = []

    added = _streams_of(diff, StreamTransformType.ADD_STREAM)
    removed = _streams_of(diff, StreamTransformType.REMOVE_STREAM)
    if added or removed:
        lines.append(f" {BULLET} Streams (+{len(added)}/-{len(removed)})")
        for stream in added:
            lines.append(
                f"   {ADD_GLYPH} {stream.stream_descriptor.fully_qualified_name}"
            )
        for stream in removed:
            lines.append(
                f"   {REMOVE_GLYPH} {stream.stream_descriptor.fully_qualified_name}"
            )

    updated = _streams_of(diff, StreamTransformType.UPDATE_STREAM)
    if updated:
        field_changes = [f for stream in updated for f in stream.update_stream]
        counts = {
            kind: sum(1 for f in field_changes if f.transform_type == kind)
            for kind in FieldTransformType
        }
        lines.append(
            f" {BULLET} Fields"
            f" (+{counts[FieldTransformType.ADD_FIELD]}"
            f"/~{counts[FieldTransformType.UPDATE_FIELD_SCHEMA]}"
            f"/-{counts[FieldTransformType.REMOVE_FIELD]})"
        )
        for stream in updated:
            lines.append(f"   {BULLET} {stream.stream_descriptor.fully_qualified_name}")
            for field in sorted(stream.update_stream, key=_field_sort_key):
                glyph = FIELD_GLYPHS[field.transform_type]
                lines.append(f"     {glyph} {field.field_path}")

    return "".join(f"{line}\n" for line in lines)
