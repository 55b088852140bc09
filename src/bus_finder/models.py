"""Data models for route records and service responses."""

from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

NonEmptyStr = Annotated[str, Field(min_length=1)]


class RouteRecord(BaseModel):
    """Represents a single scheduled bus route.

    Accepts the legacy catalog keys (busNo, from, to, via, time) as well as
    the camelCase wire names. Serializes with camelCase.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    route_id: NonEmptyStr = Field(
        validation_alias=AliasChoices("route_id", "routeId", "busNo"),
        serialization_alias="routeId",
    )
    origin: NonEmptyStr = Field(
        validation_alias=AliasChoices("origin", "from"),
    )
    destination: NonEmptyStr = Field(
        validation_alias=AliasChoices("destination", "to"),
    )
    waypoint: NonEmptyStr = Field(
        validation_alias=AliasChoices("waypoint", "via"),
    )
    departure_time: NonEmptyStr = Field(
        validation_alias=AliasChoices("departure_time", "departureTime", "time"),
        serialization_alias="departureTime",
    )

    def places(self) -> tuple[str, str, str]:
        """Return the place names this route touches."""
        return (self.origin, self.destination, self.waypoint)


class SearchResponse(BaseModel):
    """Successful response of the route search endpoint."""

    success: bool = True
    count: int = Field(ge=0)
    routes: list[RouteRecord]


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Service health report."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    route_count: int = Field(
        ge=0,
        validation_alias=AliasChoices("route_count", "routeCount"),
        serialization_alias="routeCount",
    )
    timestamp: str  # ISO-8601
