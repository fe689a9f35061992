from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence
import base64

from pydantic import BaseModel, Field

from firestore_model.info_board import InfoItem
from firestore_model.storage.firestore_path import format_path


def to_json_value(value: Any) -> Any:
    """Convert Firestore field values into plain JSON types.

    GeoPoints become latitude/longitude maps, document references become their
    slash path and bytes become base64 text. Maps and arrays are walked.
    """

    if isinstance(value, Mapping):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return {"latitude": value.latitude, "longitude": value.longitude}
    reference_path = getattr(value, "path", None)
    if isinstance(reference_path, str) and hasattr(value, "id"):
        return reference_path
    return value


class HealthzResponse(BaseModel):
    status: str = Field(default="ok")


class EntryResponse(BaseModel):
    id: str
    path: str
    data: dict[str, Any]

    @classmethod
    def from_document(cls, segments: Sequence[str], data: Mapping[str, Any]) -> "EntryResponse":
        return cls(id=segments[-1], path=format_path(segments), data=to_json_value(data))


class EntryKeysResponse(BaseModel):
    path: str
    keys: list[str]


class EntryCreatedResponse(BaseModel):
    id: str
    path: str


class InfoItemResponse(BaseModel):
    id: str
    text: str
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, item: InfoItem) -> "InfoItemResponse":
        return cls(id=item.id, text=item.text, created_at=item.created_at)


class InfoListResponse(BaseModel):
    items: list[InfoItemResponse]
    total: int = Field(ge=0)


class InfoCreateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=1000)


class InfoCreatedResponse(BaseModel):
    id: str
