from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional

TrafficSeverity = Literal["none", "clear", "light", "moderate", "heavy"]


class ArrivalTime(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Rendering selected by use12Hour")
    text_24h: str
    text_12h: str
    timestamp_ms: int = Field(..., description="Epoch milliseconds")
    iso8601: str


class TrafficInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_traffic: bool = False
    delay_minutes: int = Field(0, ge=0)
    message: str = ""
    severity: TrafficSeverity = "none"
    duration_in_traffic_text: Optional[str] = None
    normal_duration_text: Optional[str] = None


class EnrichedRoute(BaseModel):
    """
    One ranked route alternative.

    Unknown provider fields (legs, bounds, warnings, ...) are carried through
    as extras; the declared fields below always win on a name clash.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    origin: str
    destination: str
    distance_text: Optional[str] = None
    distance_meters: Optional[float] = None
    duration_text: Optional[str] = None
    duration_seconds: Optional[float] = None
    arrival_time: ArrivalTime
    traffic: TrafficInfo
    start_location: Optional[Dict[str, Any]] = None
    end_location: Optional[Dict[str, Any]] = None
    polyline: Optional[str] = None


class RoutesResponse(BaseModel):
    routes: List[EnrichedRoute]


class ErrorResponse(BaseModel):
    error: str
