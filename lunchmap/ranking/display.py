"""Display values derived from a place, so renderers do no numeric work."""

from __future__ import annotations

import math

from pydantic import BaseModel, computed_field

NO_PRICE = "—"
PRICE_BANDS = ["€", "€€", "€€€", "€€€€"]

FULL_STAR = "★"
HALF_STAR = "⯪"
EMPTY_STAR = "☆"
MAX_STARS = 5


class StarRating(BaseModel):
    full: int
    half: bool
    empty: int

    @computed_field
    @property
    def text(self) -> str:
        return FULL_STAR * self.full + (HALF_STAR if self.half else "") + EMPTY_STAR * self.empty


def price_band(price: float | None) -> str:
    """Map a price to its band; bands are closed on the lower side as listed."""
    if price is None or not math.isfinite(price):
        return NO_PRICE
    if price <= 10:
        return PRICE_BANDS[0]
    if price < 13:
        return PRICE_BANDS[1]
    if price < 15:
        return PRICE_BANDS[2]
    return PRICE_BANDS[3]


def format_distance(meters: float) -> str:
    whole = int(round(meters))
    if whole < 1000:
        return f"{whole} m"
    return f"{whole / 1000:.1f} km"


def format_price(price: float | None) -> str:
    """Render a price as "9.5 €"; whole prices drop the decimals."""
    if price is None or not math.isfinite(price):
        return NO_PRICE
    amount = int(price) if float(price).is_integer() else price
    return f"{amount} €"


def star_rating(avg_rating: float) -> StarRating:
    value = max(0.0, min(float(MAX_STARS), avg_rating))
    full = math.floor(value)
    half = full < MAX_STARS and value - full >= 0.5
    return StarRating(full=full, half=half, empty=MAX_STARS - full - int(half))
