from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.models import PlaceRecord, ResolutionResult


# =========================
# REQUEST
# =========================
class ChatRequest(BaseModel):
    # Optional so a missing field gets the same 400 as an empty one
    message: Optional[str] = None


# =========================
# PLACE
# =========================
class HoursOut(BaseModel):
    days: str
    open: str
    close: str


class PlaceOut(BaseModel):
    id: str
    name: str
    category: List[str] = Field(default_factory=list)
    description: str = ""
    address: str = ""
    hours: List[HoursOut] = Field(default_factory=list)
    hours_text: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    map_link: Optional[str] = None

    @classmethod
    def from_record(cls, place: PlaceRecord) -> "PlaceOut":
        return cls(**place.to_dict(), hours_text=place.hours_text)


# =========================
# RESPONSE
# =========================
class ChatResponse(BaseModel):
    reply: str
    status: str
    intent: Optional[str] = None
    place: Optional[PlaceOut] = None

    @classmethod
    def from_result(cls, result: ResolutionResult) -> "ChatResponse":
        return cls(
            reply=result.answer,
            status=result.status.name.lower(),
            intent=result.intent.name.lower() if result.intent else None,
            place=PlaceOut.from_record(result.place) if result.place else None,
        )


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    places: int
