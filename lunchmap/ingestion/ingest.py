from __future__ import annotations

from .config import DEFAULT_FEED_CONFIG, FeedConfig
from .fetch import fetch_feed
from .models import Place
from .parser import parse_feed


def load_places(config: FeedConfig = DEFAULT_FEED_CONFIG) -> list[Place]:
    """
    Execute the ingestion pipeline for one render cycle.

    Steps:
    - Fetch the configured feed (raises FetchFailure on transport errors).
    - Parse every row into a Place, keeping rows with bad coordinates.
    """
    text = fetch_feed(config.feed_url, timeout=config.fetch_timeout)
    return parse_feed(text, config)


if __name__ == "__main__":
    import logging

    from ..ranking.data_store import RenderState, render

    logging.basicConfig(level=logging.INFO)
    places = load_places()
    ranked = render(RenderState(places=tuple(places)), DEFAULT_FEED_CONFIG.origin)
    print(f"Loaded {len(places)} places, {len(ranked)} with coordinates:")
    for p in ranked:
        print(f"{p.rank:>3}. {p.name} ({p.distance_label}, {p.price_band}) {p.stars.text}")
