# schemas.py
from pydantic import BaseModel, Field
from typing import Any, Optional, Union


class TrackRequest(BaseModel):
    tracking_number: Optional[Union[str, int]] = Field(None, description="MAX tracking number, case-insensitive")


class TimelineEntry(BaseModel):
    title: str
    description: Optional[str] = None
    location: str
    date: str
    status: str


class TrackingData(BaseModel):
    tracking_number: str
    status: str
    current_status: Optional[str] = None
    last_updated: Optional[str] = None
    origin: str
    destination: str
    estimated_delivery: Optional[str] = None
    weight: str
    service_type: str
    carrier: str
    timeline: list[TimelineEntry] = Field(default_factory=list)


class TrackingEnvelope(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
    timestamp: str
