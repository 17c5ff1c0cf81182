"""Pantry stock status computation."""

from enum import StrEnum


class StockStatus(StrEnum):
    CRITICAL = "critical"
    LOW = "low"
    MEDIUM = "medium"
    FULL = "full"


STOCK_LABELS: dict[StockStatus, str] = {
    StockStatus.CRITICAL: "Running Low",
    StockStatus.LOW: "Low Stock",
    StockStatus.MEDIUM: "Medium",
    StockStatus.FULL: "In Stock",
}


def get_stock_status(quantity: float | None) -> StockStatus:
    """Bucket a quantity; a missing quantity counts as none left."""
    qty = quantity or 0
    if qty <= 1:
        return StockStatus.CRITICAL
    if qty <= 3:
        return StockStatus.LOW
    if qty <= 5:
        return StockStatus.MEDIUM
    return StockStatus.FULL


def get_stock_label(status: StockStatus) -> str:
    return STOCK_LABELS[status]
