import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone

from pydantic import BaseModel, StrictInt, field_serializer, field_validator
from sqlmodel import SQLModel

from app.utils.utils import format_month_year, parse_month_year

ERR_INVALID_BODY = "invalid request body"
ERR_INVALID_DATE = "invalid date format, expected MM-YYYY"
ERR_INVALID_PRICE = "price should be >=0"
ERR_INVALID_ID_FORMAT = "invalid id format"
ERR_INVALID_ID = "id should be > 0"
ERR_INVALID_USER_ID = "invalid user_id format"
ERR_INVALID_PAGINATION = "limit and offset should be integers"
ERR_NOT_FOUND = "subscription not found"
ERR_INTERNAL = "internal error"

# Rango de un INTEGER de 32 bits en la DB
PRICE_MAX = 2**31 - 1


def _month_year(value):
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(ERR_INVALID_DATE)
    try:
        return parse_month_year(value)
    except ValueError:
        raise ValueError(ERR_INVALID_DATE) from None


def _valid_price(value):
    if value is None:
        return value
    if value < 0:
        raise ValueError(ERR_INVALID_PRICE)
    if value > PRICE_MAX:
        raise ValueError(ERR_INVALID_BODY)
    return value


class SubscriptionCreate(SQLModel):
    service_name: str
    price: StrictInt
    user_id: uuid.UUID
    start_date: date
    end_date: date | None = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "service_name": "Yandex Plus",
                "price": 400,
                "user_id": "60601fee-2bf1-4721-ae6f-7636e79a0cba",
                "start_date": "07-2025",
                "end_date": "12-2025",
            }
        }
    }

    @field_validator("price")
    @classmethod
    def validate_price(cls, value):
        return _valid_price(value)

    @field_validator("start_date", mode="before")
    @classmethod
    def validate_start_date(cls, value):
        return _month_year(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def validate_end_date(cls, value):
        return None if value is None else _month_year(value)


class SubscriptionUpdate(BaseModel):
    service_name: str | None = None
    price: StrictInt | None = None
    end_date: date | None = None

    model_config = {
        "json_schema_extra": {
            "example": {"service_name": "Netflix", "price": 800, "end_date": "12-2025"}
        }
    }

    @field_validator("price")
    @classmethod
    def validate_price(cls, value):
        return _valid_price(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def validate_end_date(cls, value):
        # null equivale a "no enviado"
        return None if value is None else _month_year(value)

    def changes(self) -> dict:
        """Campos enviados con valor (los null se ignoran)"""
        return self.model_dump(exclude_none=True)


class SubscriptionRead(SQLModel):
    id: int
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: str
    end_date: str | None = None
    created_at: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def format_month(cls, value):
        # En la API las fechas viajan como MM-YYYY
        return format_month_year(value) if isinstance(value, date) else value

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        # SQLite devuelve datetimes naive; los guardamos siempre en UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class SubscriptionList(BaseModel):
    subscriptions: list[SubscriptionRead]


class TotalCostRead(BaseModel):
    total_cost: int
    count: int

    model_config = {"json_schema_extra": {"example": {"total_cost": 1200, "count": 3}}}


class ErrorRead(BaseModel):
    error: str

    model_config = {"json_schema_extra": {"example": {"error": ERR_NOT_FOUND}}}


@dataclass(frozen=True)
class ListParams:
    limit: int
    offset: int


@dataclass(frozen=True)
class CostFilter:
    start_period: date
    end_period: date
    user_id: uuid.UUID | None = None
    service_name: str | None = None


@dataclass(frozen=True)
class TotalCost:
    total_cost: int
    count: int
