# dbwriter/schemas/sampleSchemas.py
import math
import re
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from datetime import datetime, timezone

# RFC 3339 date-time with a mandatory zone, e.g. 2021-09-19T10:41:33.333Z
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """RFC 3339 in UTC, fractional seconds without trailing zeros."""
    value = to_utc(value)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    fraction = f"{value.microsecond:06d}".rstrip("0")
    if fraction:
        text += "." + fraction
    return text + "Z"


class SampleCreate(BaseModel):
    name: str = Field(min_length=1, examples=["temp"])
    timestamp: datetime = Field(examples=["2021-09-19T10:41:33.333Z"])
    v0: Optional[float] = Field(default=None, allow_inf_nan=False)
    v1: Optional[float] = Field(default=None, allow_inf_nan=False)

    @field_validator("timestamp", mode="before")
    @classmethod
    def timestamp_must_be_rfc3339(cls, value):
        if not isinstance(value, str) or not RFC3339_PATTERN.match(value):
            raise ValueError("must be an RFC 3339 date-time string")
        return value

    @field_validator("v0", "v1", mode="before")
    @classmethod
    def value_must_be_number(cls, value):
        # bool is an int subclass; JSON true/false are not numbers here
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value


class SampleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    timestamp: datetime
    v0: Optional[float] = None
    v1: Optional[float] = None

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class SampleLookup(BaseModel):
    message: str
    status: int


class HTTPError(BaseModel):
    code: int = Field(examples=[400])
    message: str = Field(examples=["status bad request"])
