from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .layouts import LAYOUTS

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vTPXZ6M20Zh0YZkq60NtJSYZ2rv3J-hravmeyeiaTOwtprq1EjrU4St0rQCXvYiUCNp5Sy47AMAoxEW"
    "/pub?gid=0&single=true&output=csv"
)

_DELIMITERS = {"comma": ",", ",": ",", "tab": "\t", "\\t": "\t", "\t": "\t"}
COORDINATE_MODES = ("split", "combined", "mixed")


def _delimiter_from_env(default: str = "comma") -> str:
    raw = os.getenv("LUNCHMAP_FEED_DELIMITER", default)
    # Unknown names fall through unchanged and are rejected in __post_init__
    return _DELIMITERS.get(raw.strip().lower(), raw)


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass(frozen=True)
class FeedConfig:
    """
    Configuration for fetching and parsing the places feed.

    ``layout`` names one of the column layouts in ``layouts.LAYOUTS``;
    ``coordinates`` is ``split``, ``combined`` or ``mixed`` (detected per row).
    """

    feed_url: str = os.getenv("LUNCHMAP_FEED_URL", SHEET_URL)
    delimiter: str = _delimiter_from_env()
    layout: str = os.getenv("LUNCHMAP_FEED_LAYOUT", "full")
    coordinates: str = os.getenv("LUNCHMAP_FEED_COORDINATES", "mixed")
    truthy_token: str = os.getenv("LUNCHMAP_TRUTHY_TOKEN", "TRUE")
    origin_name: str = os.getenv("LUNCHMAP_ORIGIN_NAME", "Cell Chip Group")
    origin_lat: float = float(os.getenv("LUNCHMAP_ORIGIN_LAT", "48.20131190157764"))
    origin_lng: float = float(os.getenv("LUNCHMAP_ORIGIN_LNG", "16.36347258815447"))
    fetch_timeout: float | None = _optional_float("LUNCHMAP_FETCH_TIMEOUT")

    def __post_init__(self) -> None:
        if self.delimiter not in (",", "\t"):
            raise ValueError(f"Unsupported feed delimiter: {self.delimiter!r}")
        if self.coordinates not in COORDINATE_MODES:
            raise ValueError(f"Unsupported coordinate mode: {self.coordinates!r}")
        if self.layout not in LAYOUTS:
            raise ValueError(f"Unknown feed layout: {self.layout!r}")

    @property
    def origin(self) -> tuple[float, float]:
        return self.origin_lat, self.origin_lng


DEFAULT_FEED_CONFIG = FeedConfig()
