"""Predict when pantry staples will run out based on purchase history."""

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from mangia.models.enums import PantryEventType, Urgency
from mangia.schemas.prediction import PurchaseEvent, ReorderPrediction

logger = logging.getLogger(__name__)

MIN_PURCHASE_CYCLES = 3
PREDICTION_WINDOW_DAYS = 7
MAX_CYCLE_DAYS = 365
MAX_COEFFICIENT_OF_VARIATION = 1.5
DECAY = 0.7  # Weight multiplier per step back from the most recent interval
MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 0.95
SOON_DAYS = 3

SECONDS_PER_DAY = 24 * 60 * 60


def weighted_average(intervals: list[float], decay: float = DECAY) -> float:
    """Exponentially weighted mean; the most recent interval weighs most."""
    weighted_sum = 0.0
    weight_sum = 0.0
    last = len(intervals) - 1
    for i, interval in enumerate(intervals):
        weight = decay ** (last - i)
        weighted_sum += interval * weight
        weight_sum += weight
    return weighted_sum / weight_sum if weight_sum > 0 else 0.0


def sample_variance(values: list[float], mean: float) -> float:
    if len(values) <= 1:
        return 0.0
    return sum((value - mean) ** 2 for value in values) / (len(values) - 1)


def urgency_for(days_until: int) -> Urgency:
    if days_until <= 0:
        return Urgency.NOW
    if days_until <= SOON_DAYS:
        return Urgency.SOON
    return Urgency.UPCOMING


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def predict_reorder_dates(
    events: Iterable[PurchaseEvent],
    now: datetime | None = None,
    min_purchase_cycles: int = MIN_PURCHASE_CYCLES,
    window_days: int = PREDICTION_WINDOW_DAYS,
) -> list[ReorderPrediction]:
    """Forecast run-out dates from "added" events.

    Items are grouped by lowercased, trimmed name and need at least
    min_purchase_cycles purchases. Items with implausible cycles, erratic
    intervals, or a run-out further than window_days away are dropped.
    Results are ordered by urgency, then by days until run-out.
    """
    now = _as_utc(now or datetime.now(UTC))

    purchases: dict[str, list[datetime]] = {}
    display_names: dict[str, tuple[datetime, str]] = {}
    for event in events:
        if event.event_type != PantryEventType.ADDED:
            continue
        key = event.item_name.lower().strip()
        timestamp = _as_utc(event.timestamp)
        purchases.setdefault(key, []).append(timestamp)
        # Show the casing of the most recent purchase
        if key not in display_names or timestamp >= display_names[key][0]:
            display_names[key] = (timestamp, event.item_name)

    predictions: list[ReorderPrediction] = []
    for key, dates in purchases.items():
        if len(dates) < min_purchase_cycles:
            continue

        dates.sort()
        intervals = [
            (later - earlier).total_seconds() / SECONDS_PER_DAY
            for earlier, later in zip(dates, dates[1:])
        ]

        avg_cycle = weighted_average(intervals)
        if avg_cycle <= 0 or avg_cycle > MAX_CYCLE_DAYS:
            logger.debug(f"Skipping '{key}': unreasonable cycle of {avg_cycle:.1f} days")
            continue

        coefficient_of_variation = math.sqrt(sample_variance(intervals, avg_cycle)) / avg_cycle
        if coefficient_of_variation > MAX_COEFFICIENT_OF_VARIATION:
            logger.debug(f"Skipping '{key}': purchases too erratic (cv={coefficient_of_variation:.2f})")
            continue
        confidence = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, 1 - coefficient_of_variation))

        last_purchased = dates[-1]
        predicted_run_out = last_purchased + timedelta(days=avg_cycle)
        days_until = int(
            _round_half_up((predicted_run_out - now).total_seconds() / SECONDS_PER_DAY)
        )
        if days_until > window_days:
            continue

        predictions.append(
            ReorderPrediction(
                item_name=display_names[key][1],
                average_cycle_days=_round_half_up(avg_cycle, 1),
                last_purchased=last_purchased.date(),
                predicted_run_out=predicted_run_out.date(),
                days_until_run_out=days_until,
                urgency=urgency_for(days_until),
                confidence=_round_half_up(confidence, 2),
                purchase_count=len(dates),
            )
        )

    return sorted(
        predictions,
        key=lambda prediction: (prediction.urgency.rank, prediction.days_until_run_out),
    )
