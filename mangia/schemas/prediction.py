"""Consumption prediction schemas."""

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mangia.models.enums import PantryEventType, Urgency


class PurchaseEvent(BaseModel):
    """An entry of the pantry event log."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    item_name: str
    event_type: PantryEventType
    quantity: float | None = None
    unit: str | None = None
    timestamp: datetime = Field(validation_alias=AliasChoices("timestamp", "created_at"))


class ReorderPrediction(BaseModel):
    """When a staple is expected to run out."""

    item_name: str
    average_cycle_days: float
    last_purchased: date
    predicted_run_out: date
    days_until_run_out: int
    urgency: Urgency
    confidence: float = Field(..., ge=0.3, le=0.95)
    purchase_count: int
