from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..ingestion.models import Place
from .display import StarRating


class RankedPlace(Place):
    """A Place with its distance from the origin and its unfiltered rank."""

    model_config = ConfigDict(frozen=True)

    distance_m: float = Field(..., ge=0.0)
    rank: int = Field(..., ge=1)
    distance_label: str
    price_band: str
    price_label: str
    stars: StarRating


class ListedPlace(BaseModel):
    """One line of the alphabetical directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    link: str = ""
    price: float | None = None
    price_label: str


class PlaceFilters(BaseModel):
    """Category predicates combined with AND; unset predicates match everything."""

    model_config = ConfigDict(frozen=True)

    vegan: bool = False
    veggie: bool = False
    cuisine: str | None = Field(default=None, description="Exact cuisine label")

    def matches(self, place: Place) -> bool:
        if self.vegan and not place.vegan:
            return False
        if self.veggie and not place.veggie:
            return False
        cuisine = (self.cuisine or "").strip()
        if cuisine and place.cuisine != cuisine:
            return False
        return True


class Origin(BaseModel):
    name: str
    lat: float
    lng: float


class PlacesResponse(BaseModel):
    places: list[RankedPlace]
    order: str = "distance"
    total_places: int
    total_ranked: int
    filters: PlaceFilters
    origin: Origin


class RefreshResponse(BaseModel):
    status: str
    total_places: int
    total_ranked: int


class DirectoryResponse(BaseModel):
    places: list[ListedPlace]
    total_places: int


class MetadataResponse(BaseModel):
    origin: Origin
    cuisines: list[str]
    total_places: int
