from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class Place(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "Unknown"
    lat: float | None = None
    lng: float | None = None
    price: float | None = None
    link: str = ""
    avg_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    n_ratings: int = Field(default=0, ge=0)
    comment: str = ""
    vegan: bool = False
    veggie: bool = False
    cash_only: bool = False
    cuisine: str = ""

    @property
    def has_coordinates(self) -> bool:
        return (
            self.lat is not None
            and self.lng is not None
            and math.isfinite(self.lat)
            and math.isfinite(self.lng)
        )
