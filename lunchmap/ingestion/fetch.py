from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)

_session = requests.Session()


class FetchFailure(Exception):
    """The feed request did not complete (network or HTTP error)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not fetch feed from {url}: {reason}")
        self.url = url
        self.reason = reason


def fetch_feed(url: str, timeout: float | None = None) -> str:
    """
    Download the feed document and return it as UTF-8 text.

    Failures are not retried. Without a ``timeout`` a stalled server keeps the
    call pending.
    """
    try:
        response = _session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Feed fetch failed for %s", url, exc_info=True)
        raise FetchFailure(url, str(exc)) from exc

    response.encoding = "utf-8"
    text = response.text
    logger.info("Fetched feed from %s (%d bytes)", url, len(text))
    return text
