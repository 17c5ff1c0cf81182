"""Pantry service: loads rows, runs the pantry engine, persists the results."""

import logging
from datetime import date, datetime
from typing import Literal

from sqlalchemy.orm import Session

from mangia.config import get_settings
from mangia.models.enums import IngredientCategory, PantryEventType
from mangia.models.pantry import PantryItem
from mangia.models.pantry_event import PantryEvent
from mangia.models.recipe import Recipe
from mangia.schemas.deduction import DeductionResult, DeductRequest
from mangia.schemas.grocery import ConsolidatedGroceryItem
from mangia.schemas.pantry import BulkAddItem, BulkAddResult, ExpiryAlerts, PantryItemData, StockCheckResult
from mangia.schemas.prediction import PurchaseEvent, ReorderPrediction
from mangia.schemas.recipe import RecipeData, RecipeMatch
from mangia.schemas.scan import DeduplicationResult, ScanSource
from mangia.services.categorization import categorize_ingredient
from mangia.services.consumption_predictor import predict_reorder_dates
from mangia.services.errors import NotFoundError
from mangia.services.expiry import get_expiry_default, split_expiry_alerts
from mangia.services.grocery_generator import generate_grocery_items
from mangia.services.ingredient_matcher import normalize_item_name
from mangia.services.item_deduplicator import deduplicate_items
from mangia.services.pantry_deduction import PantryDeductor
from mangia.services.pantry_events import log_pantry_events
from mangia.services.recipe_matching import find_recipe_matches
from mangia.services.serving_suggestions import get_serving_suggestions
from mangia.services.stock_status import get_stock_label, get_stock_status
from mangia.services.undo_store import UndoStore, get_undo_store

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "piece"


class PantryService:
    """Service for pantry-related operations.

    Deductions are written item by item without a surrounding transaction;
    a failure part-way leaves earlier items deducted, and the undo snapshot
    still covers them.
    """

    def __init__(self, db: Session, undo_store: UndoStore | None = None):
        self.db = db
        self.settings = get_settings()
        self.deductor = PantryDeductor(
            undo_store if undo_store is not None else get_undo_store(db),
            ttl_seconds=self.settings.undo_ttl_seconds,
        )

    def _get_pantry_items(self, user_id: int) -> list[PantryItem]:
        return (
            self.db.query(PantryItem)
            .filter(PantryItem.user_id == user_id)
            .order_by(PantryItem.id)
            .all()
        )

    def _get_recipe(self, recipe_id: int, user_id: int) -> Recipe:
        recipe = (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.user_id == user_id)
            .first()
        )
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    @staticmethod
    def _pantry_data(items: list[PantryItem]) -> list[PantryItemData]:
        return [PantryItemData.model_validate(item) for item in items]

    def generate_grocery_list(
        self,
        user_id: int,
        recipe_ids: list[int],
    ) -> list[ConsolidatedGroceryItem]:
        """Build a shopping list for the user's recipes among recipe_ids.

        Ids that are unknown or belong to someone else are ignored.
        """
        if not recipe_ids:
            raise ValueError("At least one recipe ID is required")

        recipes = (
            self.db.query(Recipe)
            .filter(Recipe.id.in_(recipe_ids), Recipe.user_id == user_id)
            .all()
        )
        # Keep the order the caller asked for; it decides display order within a section
        position = {recipe_id: index for index, recipe_id in enumerate(recipe_ids)}
        recipes.sort(key=lambda recipe: position[recipe.id])

        return generate_grocery_items(
            [RecipeData.model_validate(recipe) for recipe in recipes],
            self._pantry_data(self._get_pantry_items(user_id)),
        )

    def match_recipes(self, user_id: int, min_match_percentage: float = 0) -> list[RecipeMatch]:
        """Rank the user's recipes by how much of each is already in the pantry."""
        if not 0 <= min_match_percentage <= 100:
            raise ValueError("min_match_percentage must be between 0 and 100")

        recipes = (
            self.db.query(Recipe).filter(Recipe.user_id == user_id).order_by(Recipe.id).all()
        )
        return find_recipe_matches(
            [RecipeData.model_validate(recipe) for recipe in recipes],
            self._pantry_data(self._get_pantry_items(user_id)),
            min_match_percentage,
        )

    def deduct_recipe(
        self,
        user_id: int,
        recipe_id: int,
        servings_cooked: float,
        servings_original: float,
    ) -> DeductionResult:
        """Take a cooked recipe's ingredients out of the pantry.

        Raises:
            NotFoundError: the recipe does not exist or is not the user's
            pydantic.ValidationError: servings are not positive numbers
        """
        request = DeductRequest(
            recipe_id=recipe_id,
            servings_cooked=servings_cooked,
            servings_original=servings_original,
        )
        recipe = self._get_recipe(request.recipe_id, user_id)
        rows = self._get_pantry_items(user_id)

        result = self.deductor.deduct(
            user_id,
            RecipeData.model_validate(recipe).ingredients,
            self._pantry_data(rows),
            request.servings_cooked,
            request.servings_original,
        )

        rows_by_id = {row.id: row for row in rows}
        for item in result.deducted:
            row = rows_by_id[item.pantry_item_id]
            if item.removed:
                self.db.delete(row)
            else:
                row.quantity = item.remaining
            self.db.commit()

        logger.info(
            f"Deducted recipe {recipe.id} for user {user_id}: "
            f"{len(result.deducted)} deducted, {len(result.skipped)} skipped"
        )

        log_pantry_events(
            user_id,
            [{"name": item.name, "quantity": item.deducted, "unit": None} for item in result.deducted],
            PantryEventType.DEDUCTED,
            "cooking_deduction",
        )
        log_pantry_events(
            user_id,
            [{"name": item.name, "quantity": None, "unit": None} for item in result.deducted if item.removed],
            PantryEventType.REMOVED,
            "cooking_deduction",
        )

        return result

    def undo_deduction(self, user_id: int, undo_token: str) -> int:
        """Restore pantry quantities from a deduction's snapshot.

        Items deleted by the deduction are gone and stay gone; only items
        that still exist are restored.

        Returns:
            Number of pantry items restored

        Raises:
            NotFoundError: the token is unknown, expired, used, or not the user's
        """
        snapshot = self.deductor.redeem(undo_token, user_id)

        restored = 0
        for entry in snapshot:
            row = (
                self.db.query(PantryItem)
                .filter(PantryItem.id == entry.id, PantryItem.user_id == user_id)
                .first()
            )
            if not row:
                logger.warning(f"Pantry item {entry.id} no longer exists, cannot restore")
                continue
            row.quantity = entry.quantity
            restored += 1

        self.db.commit()
        logger.info(f"Undid deduction {undo_token} for user {user_id}: {restored} restored")
        return restored

    def predict_reorders(self, user_id: int, now: datetime | None = None) -> list[ReorderPrediction]:
        """Forecast which staples the user will run out of soon."""
        events = (
            self.db.query(PantryEvent)
            .filter(
                PantryEvent.user_id == user_id,
                PantryEvent.event_type == PantryEventType.ADDED.value,
            )
            .order_by(PantryEvent.created_at.desc())
            .all()
        )
        return predict_reorder_dates(
            [PurchaseEvent.model_validate(event) for event in events],
            now=now,
            min_purchase_cycles=self.settings.min_purchase_cycles,
            window_days=self.settings.prediction_window_days,
        )

    def bulk_add(
        self,
        user_id: int,
        items: list[BulkAddItem],
        merge_strategy: Literal["increment", "replace"] = "increment",
        today: date | None = None,
    ) -> BulkAddResult:
        """Add items to the pantry, merging into items already there.

        An incoming item merges into the existing item with the same
        normalized name, including items created earlier in the same batch.
        Of several existing items with one name, the newest is merged into.
        """
        if merge_strategy not in ("increment", "replace"):
            raise ValueError(f"Unknown merge strategy: {merge_strategy}")

        existing_by_name: dict[str, PantryItem] = {}
        for row in self._get_pantry_items(user_id):
            existing_by_name[row.normalized_name or normalize_item_name(row.name)] = row

        added = 0
        merged = 0
        result_rows: list[PantryItem] = []

        for item in items:
            normalized = normalize_item_name(item.name)
            category = item.category or categorize_ingredient(item.name)
            existing = existing_by_name.get(normalized)

            if existing:
                if merge_strategy == "increment":
                    existing.quantity = (existing.quantity or 0) + item.quantity
                else:
                    existing.quantity = item.quantity
                existing.unit = item.unit or existing.unit
                existing.category = str(category)
                result_rows.append(existing)
                merged += 1
                continue

            expiry_date = item.expiry_date or get_expiry_default(item.name, category, today=today)
            row = PantryItem(
                user_id=user_id,
                name=item.name,
                normalized_name=normalized,
                quantity=item.quantity,
                unit=item.unit or DEFAULT_UNIT,
                category=str(category),
                expiry_date=expiry_date,
            )
            self.db.add(row)
            self.db.flush()
            existing_by_name[normalized] = row
            result_rows.append(row)
            added += 1

        self.db.commit()
        logger.info(f"Bulk add for user {user_id}: {added} added, {merged} merged")

        log_pantry_events(
            user_id,
            [{"name": item.name, "quantity": item.quantity, "unit": item.unit} for item in items],
            PantryEventType.ADDED,
            (items[0].source if items else None) or "bulk_add",
        )

        return BulkAddResult(added=added, merged=merged, items=self._pantry_data(result_rows))

    def expiry_alerts(
        self,
        user_id: int,
        window_days: int | None = None,
        category: IngredientCategory | str | None = None,
        today: date | None = None,
    ) -> ExpiryAlerts:
        """Pantry items that expired or expire within the window."""
        if window_days is None or not 0 <= window_days <= 365:
            window_days = self.settings.expiry_alert_window_days

        items = self._pantry_data(self._get_pantry_items(user_id))
        if category in {c.value for c in IngredientCategory}:
            items = [item for item in items if item.category == category]

        return split_expiry_alerts(items, window_days, today=today)

    def check_stock(self, user_id: int, term: str) -> StockCheckResult:
        """Stock level of the first pantry item whose name contains term."""
        search_term = term.lower().strip()
        if not search_term:
            raise ValueError("A search term is required")

        match = next(
            (row for row in self._get_pantry_items(user_id) if search_term in row.name.lower()),
            None,
        )
        if not match:
            return StockCheckResult(found=False, item=term)

        status = get_stock_status(match.quantity)
        return StockCheckResult(
            found=True,
            item=match.name,
            quantity=match.quantity,
            unit=match.unit,
            status=status.value,
            status_label=get_stock_label(status),
            expiry_date=match.expiry_date,
        )

    def serving_suggestions(self, user_id: int, recipe_id: int) -> list[int]:
        """Serving counts to offer when cooking one of the user's recipes."""
        recipe = self._get_recipe(recipe_id, user_id)
        return get_serving_suggestions(recipe.servings or 1)

    def deduplicate_scans(self, sources: list[ScanSource]) -> DeduplicationResult:
        """Merge items found by several scans of the same pantry."""
        result = deduplicate_items(sources)
        logger.info(f"Scan dedup removed {result.duplicates_removed} of {result.total_before_dedup} items")
        return result
