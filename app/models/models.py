import uuid
from datetime import date, datetime, timezone
from sqlmodel import Field, SQLModel


class Subscription(SQLModel, table=True):
    __tablename__ = "subscriptions"

    id: int | None = Field(default=None, primary_key=True)
    service_name: str = Field(index=True)
    price: int
    user_id: uuid.UUID = Field(index=True)
    start_date: date
    end_date: date | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
