"""Raw price sample data model."""

from datetime import datetime, timedelta, timezone
from pydantic import BaseModel, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def floor_timestamp(timestamp: datetime, bucket: timedelta) -> datetime:
    """Floor a timestamp to a multiple of ``bucket`` since the Unix epoch."""
    return EPOCH + ((ensure_utc(timestamp) - EPOCH) // bucket) * bucket


class Sample(BaseModel):
    """Represents one raw (timestamp, price, volume) observation from a feed."""

    timestamp: datetime = Field(..., description="Observation time (UTC)")
    price: float = Field(..., ge=0, description="Traded price")
    volume: float = Field(default=0.0, ge=0, description="Traded volume, 0 when unknown")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)
