"""Expiry date defaults and alert helpers."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta

from mangia.models.enums import IngredientCategory
from mangia.schemas.pantry import (
    ExpiryAlertCounts,
    ExpiryAlertItem,
    ExpiryAlerts,
    PantryItemData,
)
from mangia.services.expiry_rules import EXPIRY_RULES, FROZEN_DEFAULT_DAYS, ExpiryRule


def _today() -> date:
    return datetime.now(UTC).date()


def get_expiry_default(
    name: str,
    category: IngredientCategory | str,
    today: date | None = None,
    rules: dict[IngredientCategory, tuple[ExpiryRule, ...]] = EXPIRY_RULES,
) -> date | None:
    """Guess an expiry date for a newly added item.

    The rules of the item's own category are searched first, then every
    category's rules in table order. The first rule with a keyword in the
    name decides: fridge days when set, otherwise pantry days. A matching
    rule with neither ends the search without a date, and unknown items
    get no guess at all.
    """
    today = today or _today()
    lower_name = name.lower().strip()

    if category == IngredientCategory.FROZEN or "frozen" in lower_name:
        return today + timedelta(days=FROZEN_DEFAULT_DAYS)

    category_rules = rules.get(category, ())
    all_rules = tuple(rule for group in rules.values() for rule in group)

    for rule_set in (category_rules, all_rules):
        for rule in rule_set:
            if any(keyword in lower_name for keyword in rule.keywords):
                days = rule.fridge_days if rule.fridge_days is not None else rule.pantry_days
                if days is None:
                    return None
                return today + timedelta(days=days)

    return None


def compute_days_until_expiry(expiry_date: date | datetime, today: date | None = None) -> int:
    """Whole calendar days until expiry; negative once it has passed."""
    if isinstance(expiry_date, datetime):
        expiry_date = expiry_date.date()
    return (expiry_date - (today or _today())).days


def format_expiry_text(days_until: int) -> str:
    """Human-readable form of a days-until-expiry value."""
    if days_until == 0:
        return "Today"
    if days_until == 1:
        return "Tomorrow"
    if days_until == -1:
        return "Yesterday"
    if days_until < -1:
        return f"{abs(days_until)} days ago"
    return f"In {days_until} Days"


def split_expiry_alerts(
    items: Iterable[PantryItemData],
    window_days: int,
    today: date | None = None,
) -> ExpiryAlerts:
    """Group items expiring within window_days into expired and expiring.

    Expired items come most recently expired first; expiring items soonest
    first. Items without an expiry date or beyond the window are left out.
    """
    today = today or _today()
    cutoff = today + timedelta(days=window_days)

    in_window = sorted(
        (item for item in items if item.expiry_date is not None and item.expiry_date <= cutoff),
        key=lambda item: item.expiry_date,
    )

    expired: list[ExpiryAlertItem] = []
    expiring: list[ExpiryAlertItem] = []
    for item in in_window:
        days_until = compute_days_until_expiry(item.expiry_date, today)
        alert = ExpiryAlertItem(
            id=item.id,
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            unit=item.unit,
            expiry_date=item.expiry_date,
            expiry_text=format_expiry_text(days_until),
            days_until_expiry=days_until,
        )
        if days_until < 0:
            expired.append(alert)
        else:
            expiring.append(alert)

    expired.sort(key=lambda alert: alert.days_until_expiry, reverse=True)

    return ExpiryAlerts(
        expired=expired,
        expiring=expiring,
        counts=ExpiryAlertCounts(
            expired=len(expired),
            expiring=len(expiring),
            total=len(expired) + len(expiring),
        ),
    )
