"""Pydantic schemas for the booking endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

PositiveId = Annotated[StrictInt, Field(gt=0)]


class BookingRequest(BaseModel):
    """Body of ``POST /booking`` and ``PUT /booking/{bookingId}``.

    ``roomId`` must be a JSON integer; booleans, strings and floats are refused.
    """

    model_config = ConfigDict(populate_by_name=True)

    room_id: PositiveId = Field(alias="roomId")


class BookingIdResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(alias="bookingId")


class RoomRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: datetime
    updated_at: datetime


class BookingWithRoom(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    room: RoomRead = Field(alias="Room")


class ErrorResponse(BaseModel):
    detail: str
