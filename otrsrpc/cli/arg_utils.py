"""Argument parsing helpers for CLI commands."""

from __future__ import annotations

import json
import re
from typing import Any

# IDs such as TicketID=42; "007" or "2024010110000012" ticket numbers keep their text
_INTEGER = re.compile(r"^-?(0|[1-9][0-9]{0,9})$")


def parse_value(raw: str) -> Any:
    """Parse one ``KEY=VALUE`` value the way OTRS expects it.

    OTRS arguments are Perl scalars, so text stays text: ``true``, ``1.5``
    and ``null`` are sent as strings. Small integers become ints, a value
    starting with ``{`` or ``[`` is a JSON hash or list, and a JSON-quoted
    string forces text (``'"42"'``).

    Raises:
        ValueError: a hash, list or quoted value is not valid JSON.
    """
    text = raw.strip()
    if _INTEGER.match(text):
        return int(text)
    if text[:1] in ("{", "[", '"'):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON value {text!r}: {e.msg}") from e
    return text


def parse_assignments(pairs: list[str]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` items into an ordered dict; later keys win."""
    result: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got: {pair!r}")
        try:
            result[key] = parse_value(value)
        except ValueError as e:
            raise ValueError(f"{key}: {e}") from e
    return result


def render_value(value: Any) -> str:
    """Render a reply value for a table cell."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return json.dumps(value, ensure_ascii=False, default=str)
