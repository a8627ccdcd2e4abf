from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Sequence

from ..ingestion.models import Place
from .models import PlaceFilters, RankedPlace
from .ranker import rank_and_filter


@dataclass(frozen=True)
class RenderState:
    """Everything a render needs: the parsed places and the active filters."""

    places: tuple[Place, ...] = ()
    filters: PlaceFilters = field(default_factory=PlaceFilters)

    def with_filters(self, filters: PlaceFilters) -> RenderState:
        return RenderState(places=self.places, filters=filters)


def render(state: RenderState, origin: tuple[float, float]) -> list[RankedPlace]:
    return rank_and_filter(state.places, state.filters, origin)


class PlaceStore:
    """
    Holds the most recently fetched places.

    ``replace`` swaps in a whole new tuple under a lock, so a reader sees either
    the old list or the new one, and the last completed fetch wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._places: tuple[Place, ...] = ()
        self._loaded_at: float | None = None

    @property
    def loaded(self) -> bool:
        return self._loaded_at is not None

    @property
    def loaded_at(self) -> float | None:
        return self._loaded_at

    @property
    def places(self) -> tuple[Place, ...]:
        return self._places

    def replace(self, places: Sequence[Place]) -> tuple[Place, ...]:
        snapshot = tuple(places)
        with self._lock:
            self._places = snapshot
            self._loaded_at = time.time()
        return snapshot

    def snapshot(self, filters: PlaceFilters | None = None) -> RenderState:
        with self._lock:
            places = self._places
        return RenderState(places=places, filters=filters or PlaceFilters())

    def clear(self) -> None:
        with self._lock:
            self._places = ()
            self._loaded_at = None


_store = PlaceStore()


def get_store() -> PlaceStore:
    """Return the process-wide place store."""
    return _store
