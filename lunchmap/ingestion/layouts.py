"""Column layouts of the places feed.

Each layout maps a field name to its column index in the two-column coordinate
form (``lat`` and ``lng`` in adjacent cells). When a row carries both numbers
in a single ``"lat,lng"`` cell, every column after ``lng`` moves one to the
left; ``ColumnLayout.index`` applies that shift.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnLayout:
    name: str
    columns: dict[str, int]

    def index(self, field: str, combined: bool) -> int | None:
        """Return the column index of ``field`` or ``None`` if the layout lacks it."""
        idx = self.columns.get(field)
        if idx is None:
            return None
        if combined and idx > self.columns["lng"]:
            return idx - 1
        return idx


_BASIC = ["name", "lat", "lng", "price", "link"]
_RATED = _BASIC + ["avg_rating", "n_ratings"]
_FULL = _RATED + ["comment", "vegan", "veggie", "cash_only", "cuisine"]

LAYOUTS: dict[str, ColumnLayout] = {
    name: ColumnLayout(name=name, columns={field: i for i, field in enumerate(fields)})
    for name, fields in (("basic", _BASIC), ("rated", _RATED), ("full", _FULL))
}


def get_layout(name: str) -> ColumnLayout:
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown feed layout {name!r}; expected one of {sorted(LAYOUTS)}"
        ) from None
