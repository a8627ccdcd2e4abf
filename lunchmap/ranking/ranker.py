from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from ..ingestion.models import Place
from .display import format_distance, format_price, price_band, star_rating
from .geo import haversine_m
from .models import ListedPlace, PlaceFilters, RankedPlace

logger = logging.getLogger(__name__)


def rank_places(
    places: Sequence[Place],
    origin: tuple[float, float],
) -> list[RankedPlace]:
    """
    Rank every place with coordinates by distance from ``origin``.

    Places without both coordinates get no rank and are left out. Equal
    distances are ordered by name, then by feed order.
    """
    if not places:
        return []

    df = pd.DataFrame(
        {
            "lat": pd.to_numeric(pd.Series([p.lat for p in places], dtype="object"), errors="coerce").astype(float),
            "lng": pd.to_numeric(pd.Series([p.lng for p in places], dtype="object"), errors="coerce").astype(float),
            "name": [p.name for p in places],
        }
    )

    # --- Validity filter ---
    valid = df.loc[np.isfinite(df["lat"]) & np.isfinite(df["lng"])].copy()
    excluded = len(df) - len(valid)
    if excluded:
        logger.info("Skipping %d places without coordinates", excluded)
    if valid.empty:
        return []

    # --- Distance, sort, rank ---
    o_lat, o_lng = origin
    valid["distance_m"] = haversine_m(o_lat, o_lng, valid["lat"].to_numpy(), valid["lng"].to_numpy())
    valid = valid.sort_values(["distance_m", "name"], kind="mergesort")

    ranked: list[RankedPlace] = []
    for rank, (idx, distance) in enumerate(zip(valid.index, valid["distance_m"]), start=1):
        place = places[idx]
        distance = float(distance)
        ranked.append(RankedPlace(
            **place.model_dump(),
            distance_m=distance,
            rank=rank,
            distance_label=format_distance(distance),
            price_band=price_band(place.price),
            price_label=format_price(place.price),
            stars=star_rating(place.avg_rating),
        ))
    return ranked


def filter_ranked(
    ranked: Sequence[RankedPlace],
    filters: PlaceFilters,
) -> list[RankedPlace]:
    """Keep the places matching ``filters``; ranks are left untouched."""
    return [p for p in ranked if filters.matches(p)]


def rank_and_filter(
    places: Sequence[Place],
    filters: PlaceFilters,
    origin: tuple[float, float],
) -> list[RankedPlace]:
    return filter_ranked(rank_places(places, origin), filters)


def _name_key(name: str) -> str:
    return name.casefold()


def sort_by_name(ranked: Sequence[RankedPlace]) -> list[RankedPlace]:
    """Reorder ranked places alphabetically; each keeps its distance rank."""
    return sorted(ranked, key=lambda p: (_name_key(p.name), p.rank))


def list_by_name(places: Sequence[Place]) -> list[ListedPlace]:
    """
    Alphabetical directory of every place, with or without coordinates.

    Sorting is case-insensitive and stable for equal names.
    """
    listed = [
        ListedPlace(name=p.name, link=p.link, price=p.price, price_label=format_price(p.price))
        for p in places
    ]
    return sorted(listed, key=lambda p: _name_key(p.name))
