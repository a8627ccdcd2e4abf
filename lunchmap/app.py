from __future__ import annotations

import logging

from typing import Literal

from fastapi import FastAPI, HTTPException, Query

from .ingestion.config import DEFAULT_FEED_CONFIG
from .ingestion.fetch import FetchFailure
from .ingestion.ingest import load_places
from .ranking.data_store import PlaceStore, get_store
from .ranking.models import (
    DirectoryResponse,
    MetadataResponse,
    Origin,
    PlaceFilters,
    PlacesResponse,
    RefreshResponse,
)
from .ranking.ranker import filter_ranked, list_by_name, rank_places, sort_by_name

logger = logging.getLogger(__name__)

app = FastAPI(title="Lunch Map API", version="1.0.0")


def _origin() -> Origin:
    cfg = DEFAULT_FEED_CONFIG
    return Origin(name=cfg.origin_name, lat=cfg.origin_lat, lng=cfg.origin_lng)


def _refresh(store: PlaceStore) -> None:
    try:
        places = load_places(DEFAULT_FEED_CONFIG)
    except FetchFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    store.replace(places)
    logger.info("Loaded %d places from feed", len(places))


def _ensure_loaded() -> PlaceStore:
    store = get_store()
    if not store.loaded:
        _refresh(store)
    return store


# ── Endpoints ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/refresh", response_model=RefreshResponse)
def refresh() -> RefreshResponse:
    store = get_store()
    _refresh(store)
    ranked = rank_places(store.places, DEFAULT_FEED_CONFIG.origin)
    return RefreshResponse(
        status="refreshed",
        total_places=len(store.places),
        total_ranked=len(ranked),
    )


@app.get("/places", response_model=PlacesResponse)
def places(
    vegan: bool = False,
    veggie: bool = False,
    cuisine: str | None = Query(default=None, description="Exact cuisine label"),
    order: Literal["distance", "name"] = "distance",
) -> PlacesResponse:
    store = _ensure_loaded()
    filters = PlaceFilters(vegan=vegan, veggie=veggie, cuisine=cuisine)
    state = store.snapshot(filters)

    ranked = rank_places(state.places, DEFAULT_FEED_CONFIG.origin)
    visible = filter_ranked(ranked, state.filters)
    if order == "name":
        visible = sort_by_name(visible)

    return PlacesResponse(
        places=visible,
        order=order,
        total_places=len(state.places),
        total_ranked=len(ranked),
        filters=filters,
        origin=_origin(),
    )


@app.get("/metadata", response_model=MetadataResponse)
def metadata() -> MetadataResponse:
    store = _ensure_loaded()
    cuisines = sorted({p.cuisine for p in store.places if p.cuisine})
    return MetadataResponse(
        origin=_origin(),
        cuisines=cuisines,
        total_places=len(store.places),
    )


@app.get("/directory", response_model=DirectoryResponse)
def directory() -> DirectoryResponse:
    store = _ensure_loaded()
    return DirectoryResponse(
        places=list_by_name(store.places),
        total_places=len(store.places),
    )
