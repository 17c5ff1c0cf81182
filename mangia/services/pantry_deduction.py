"""Deduct a cooked recipe's ingredients from pantry stock, with undo."""

import logging
import uuid
from collections.abc import Iterable

from mangia.schemas.deduction import DeductedItem, DeductionResult, PantrySnapshot, UndoEntry
from mangia.schemas.pantry import PantryItemData
from mangia.schemas.recipe import RecipeIngredientData
from mangia.services.errors import NotFoundError
from mangia.services.ingredient_matcher import find_best_match
from mangia.services.undo_store import UndoStore

logger = logging.getLogger(__name__)

UNDO_TTL_SECONDS = 60


class PantryDeductor:
    """Computes deductions and keeps their undo snapshots.

    deduct() never writes pantry rows; callers apply the returned
    DeductedItem list (update remaining, or delete when removed).
    """

    def __init__(self, undo_store: UndoStore, ttl_seconds: int = UNDO_TTL_SECONDS):
        self.undo_store = undo_store
        self.ttl_seconds = ttl_seconds

    def deduct(
        self,
        user_id: int | str,
        ingredients: Iterable[RecipeIngredientData],
        pantry_items: Iterable[PantryItemData],
        servings_cooked: float,
        servings_original: float,
    ) -> DeductionResult:
        """Deduct ingredient quantities, scaled by servings, from the pantry.

        Each ingredient goes to the pantry item with the same normalized name,
        else to the first fuzzy match in pantry order. Ingredients with no
        positive scaled quantity or no match are reported as skipped. An item
        drawn down to zero is reported removed and cannot match again.
        """
        if servings_cooked <= 0 or servings_original <= 0:
            raise ValueError("Servings must be positive")

        scale_factor = servings_cooked / servings_original
        pantry = list(pantry_items)
        current_qty: dict[int | str, float] = {item.id: item.quantity or 0 for item in pantry}

        snapshot: list[PantrySnapshot] = []
        snapshotted: set[int | str] = set()
        deducted: list[DeductedItem] = []
        skipped: list[str] = []

        for ingredient in ingredients:
            scaled_qty = (ingredient.quantity or 0) * scale_factor
            if scaled_qty <= 0:
                skipped.append(ingredient.name)
                continue

            match = find_best_match(ingredient.name, pantry, key=lambda item: item.name)
            if match is None:
                skipped.append(ingredient.name)
                continue

            # Only the first touch records the true pre-deduction quantity
            if match.id not in snapshotted:
                snapshot.append(PantrySnapshot(id=match.id, quantity=match.quantity))
                snapshotted.add(match.id)

            current = current_qty[match.id]
            new_qty = max(0, current - scaled_qty)
            current_qty[match.id] = new_qty
            removed = new_qty <= 0
            if removed:
                pantry.remove(match)

            deducted.append(
                DeductedItem(
                    pantry_item_id=match.id,
                    name=match.name,
                    deducted=current - new_qty,
                    remaining=0 if removed else new_qty,
                    removed=removed,
                )
            )

        undo_token = str(uuid.uuid4())
        self.undo_store.set(
            undo_token,
            UndoEntry(
                user_id=user_id,
                snapshot=snapshot,
                expires_at=self.undo_store.clock() + self.ttl_seconds,
            ),
        )

        logger.debug(f"Deduction {undo_token}: {len(deducted)} deducted, {len(skipped)} skipped")
        return DeductionResult(deducted=deducted, skipped=skipped, undo_token=undo_token)

    def redeem(self, undo_token: str, user_id: int | str) -> list[PantrySnapshot]:
        """Take the snapshot stored for undo_token, consuming the token.

        Raises NotFoundError alike for unknown, expired, already used and
        other users' tokens.
        """
        entry = self.undo_store.take(undo_token, user_id)
        if entry is None:
            logger.warning(f"Undo token {undo_token} not redeemable for user {user_id}")
            raise NotFoundError("Undo token expired or not found")

        return entry.snapshot
