"""Turn delimited feed text into normalized Place records.

Per-row problems never raise: every field is coerced independently and falls
back to its default (``None`` for coordinates and price, ``0`` for ratings).
"""

from __future__ import annotations

import logging
import math
import re
from typing import List

from .config import DEFAULT_FEED_CONFIG, FeedConfig
from .layouts import ColumnLayout, get_layout
from .models import Place

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

RawRow = List[str]


def split_line(line: str, delimiter: str = ",") -> RawRow:
    """
    Split one feed line into trimmed fields.

    Tab-separated lines are split plainly. For any other delimiter a field
    that starts with a quote may contain the delimiter, and a doubled quote
    inside it stands for one literal quote character. A quote anywhere else is
    kept as is.
    """
    if delimiter == "\t":
        return [field.strip() for field in line.split("\t")]

    fields: RawRow = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < len(line) and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        elif ch == '"' and not "".join(current).strip():
            # Only a quote opening the field starts a quoted segment
            current = []
            in_quotes = True
        elif ch == delimiter:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current).strip())
    return fields


def split_rows(text: str, delimiter: str = ",") -> list[RawRow]:
    """Split a document into raw rows, dropping the header and blank lines."""
    lines = _LINE_BREAK.split(text.strip())
    if len(lines) <= 1:
        return []
    return [split_line(line, delimiter) for line in lines[1:] if line.strip()]


def parse_float(raw: str | None) -> float | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not _DECIMAL.fullmatch(raw):
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def parse_count(raw: str | None) -> int:
    value = parse_float(raw)
    if value is None or value < 0:
        return 0
    return int(value)


def parse_rating(raw: str | None) -> float:
    if raw is None:
        return 0.0
    raw = raw.strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    value = parse_float(raw)
    if value is None:
        return 0.0
    # Clamp to [0, 5]
    return max(0.0, min(5.0, value))


def parse_flag(raw: str | None, truthy_token: str = "TRUE") -> bool:
    return raw is not None and raw.strip() == truthy_token


def _cell(row: RawRow, idx: int | None) -> str | None:
    if idx is None or idx >= len(row):
        return None
    return row[idx]


def parse_row(
    row: RawRow,
    layout: ColumnLayout,
    coordinates: str = "mixed",
    truthy_token: str = "TRUE",
) -> Place:
    """Map one raw row onto a Place using ``layout``."""
    lat_cell = _cell(row, layout.index("lat", combined=False)) or ""
    if coordinates == "mixed":
        combined = "," in lat_cell
    else:
        combined = coordinates == "combined"

    if combined:
        parts = lat_cell.split(",")
        lat = parse_float(parts[0])
        lng = parse_float(parts[1]) if len(parts) > 1 else None
    else:
        lat = parse_float(lat_cell)
        lng = parse_float(_cell(row, layout.index("lng", combined=False)))

    def text(field: str) -> str:
        return (_cell(row, layout.index(field, combined)) or "").strip()

    return Place(
        name=text("name") or "Unknown",
        lat=lat,
        lng=lng,
        price=parse_float(text("price")),
        link=text("link"),
        avg_rating=parse_rating(text("avg_rating")),
        n_ratings=parse_count(text("n_ratings")),
        comment=text("comment"),
        vegan=parse_flag(text("vegan"), truthy_token),
        veggie=parse_flag(text("veggie"), truthy_token),
        cash_only=parse_flag(text("cash_only"), truthy_token),
        cuisine=text("cuisine"),
    )


def parse_feed(text: str, config: FeedConfig = DEFAULT_FEED_CONFIG) -> list[Place]:
    """
    Parse a whole feed document into Place records.

    The first line is a header and is skipped without validation. An empty or
    header-only document yields an empty list. Rows without usable coordinates
    are kept; the ranker is responsible for excluding them.
    """
    layout = get_layout(config.layout)
    rows = split_rows(text, config.delimiter)
    places = [
        parse_row(row, layout, config.coordinates, config.truthy_token) for row in rows
    ]

    missing = sum(1 for p in places if not p.has_coordinates)
    logger.debug(
        "Parsed %d places with layout %r (%d without coordinates)",
        len(places), layout.name, missing,
    )
    return places
