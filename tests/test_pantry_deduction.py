"""Tests for cooking deductions and undo."""

import threading
import time

import pytest

from mangia.schemas.pantry import PantryItemData
from mangia.schemas.recipe import RecipeIngredientData
from mangia.services.errors import NotFoundError
from mangia.services.pantry_deduction import PantryDeductor
from mangia.services.undo_store import InMemoryUndoStore


def _ingredients(*pairs):
    return [RecipeIngredientData(name=name, quantity=qty, unit="piece") for name, qty in pairs]


def _pantry(*rows):
    return [PantryItemData(id=item_id, name=name, quantity=qty, unit="piece") for item_id, name, qty in rows]


@pytest.fixture
def deductor(undo_store):
    return PantryDeductor(undo_store)


class TestDeduct:
    """Tests for PantryDeductor.deduct."""

    def test_scales_by_servings(self, deductor):
        result = deductor.deduct(1, _ingredients(("eggs", 2)), _pantry((7, "Eggs", 3)), 2, 4)

        [eggs] = result.deducted
        assert eggs.pantry_item_id == 7
        assert eggs.name == "Eggs"
        assert eggs.deducted == 1
        assert eggs.remaining == 2
        assert eggs.removed is False
        assert result.skipped == []

    def test_item_used_up_is_removed(self, deductor):
        result = deductor.deduct(1, _ingredients(("butter", 1)), _pantry((1, "Butter", 1)), 4, 4)

        [butter] = result.deducted
        assert butter.removed is True
        assert butter.remaining == 0
        assert butter.deducted == 1

    def test_deducts_no_more_than_on_hand(self, deductor):
        result = deductor.deduct(1, _ingredients(("rice", 2)), _pantry((1, "rice", 0.5)), 1, 1)

        [rice] = result.deducted
        assert rice.deducted == 0.5
        assert rice.removed is True

    def test_skipped_ingredients(self, deductor):
        ingredients = [
            RecipeIngredientData(name="salt", quantity=None),
            RecipeIngredientData(name="water", quantity=0),
            RecipeIngredientData(name="saffron", quantity=1),
        ]

        result = deductor.deduct(1, ingredients, _pantry((1, "salt", 5), (2, "water", 5)), 1, 1)

        assert result.deducted == []
        assert result.skipped == ["salt", "water", "saffron"]

    def test_exact_match_preferred_over_earlier_fuzzy(self, deductor):
        pantry = _pantry((1, "chicken breast", 4), (2, "Chicken", 4))

        result = deductor.deduct(1, _ingredients(("chicken", 1)), pantry, 1, 1)

        assert result.deducted[0].pantry_item_id == 2

    def test_same_item_deducted_twice(self, deductor):
        pantry = _pantry((1, "Milk", 2))

        result = deductor.deduct(1, _ingredients(("milk", 0.5), ("whole milk", 0.5)), pantry, 1, 1)

        assert [d.remaining for d in result.deducted] == [1.5, 1.0]
        [snapshot] = deductor.redeem(result.undo_token, 1)
        assert (snapshot.id, snapshot.quantity) == (1, 2)

    def test_removed_item_does_not_match_again(self, deductor):
        pantry = _pantry((1, "flour", 1), (2, "bread flour", 5))

        result = deductor.deduct(1, _ingredients(("flour", 1), ("flour", 1)), pantry, 1, 1)

        assert [(d.pantry_item_id, d.removed) for d in result.deducted] == [(1, True), (2, False)]
        assert result.deducted[1].remaining == 4

    def test_inputs_not_mutated(self, deductor):
        pantry = _pantry((1, "Eggs", 3))

        deductor.deduct(1, _ingredients(("eggs", 3)), pantry, 1, 1)

        assert len(pantry) == 1
        assert pantry[0].quantity == 3

    @pytest.mark.parametrize("cooked,original", [(0, 4), (2, 0), (-1, 4)])
    def test_invalid_servings(self, deductor, cooked, original):
        with pytest.raises(ValueError):
            deductor.deduct(1, _ingredients(("eggs", 2)), _pantry((1, "Eggs", 3)), cooked, original)

    def test_each_deduction_gets_a_new_token(self, deductor):
        first = deductor.deduct(1, _ingredients(("eggs", 1)), _pantry((1, "Eggs", 3)), 1, 1)
        second = deductor.deduct(1, _ingredients(("eggs", 1)), _pantry((1, "Eggs", 3)), 1, 1)
        assert first.undo_token != second.undo_token


class TestRedeem:
    """Tests for PantryDeductor.redeem."""

    def _deduct(self, deductor, user_id=1):
        return deductor.deduct(user_id, _ingredients(("eggs", 2)), _pantry((7, "Eggs", 3)), 1, 1)

    def test_returns_snapshot(self, deductor):
        result = self._deduct(deductor)

        snapshot = deductor.redeem(result.undo_token, 1)

        assert [(s.id, s.quantity) for s in snapshot] == [(7, 3)]

    def test_single_use(self, deductor, undo_store):
        result = self._deduct(deductor)
        deductor.redeem(result.undo_token, 1)

        with pytest.raises(NotFoundError):
            deductor.redeem(result.undo_token, 1)
        assert len(undo_store) == 0

    def test_expires_after_ttl(self, deductor, clock):
        result = self._deduct(deductor)
        clock.advance(61)

        with pytest.raises(NotFoundError):
            deductor.redeem(result.undo_token, 1)

    def test_valid_within_ttl(self, deductor, clock):
        result = self._deduct(deductor)
        clock.advance(59)

        assert deductor.redeem(result.undo_token, 1)

    def test_custom_ttl(self, undo_store, clock):
        deductor = PantryDeductor(undo_store, ttl_seconds=5)
        result = self._deduct(deductor)
        clock.advance(5)

        with pytest.raises(NotFoundError):
            deductor.redeem(result.undo_token, 1)

    def test_other_user_cannot_redeem(self, deductor):
        result = self._deduct(deductor, user_id=1)

        with pytest.raises(NotFoundError):
            deductor.redeem(result.undo_token, 2)

        # The owner can still use it
        assert deductor.redeem(result.undo_token, 1)

    def test_user_id_compared_as_text(self, deductor):
        result = self._deduct(deductor, user_id=1)
        assert deductor.redeem(result.undo_token, "1")

    def test_unknown_token(self, deductor):
        with pytest.raises(NotFoundError, match="expired or not found"):
            deductor.redeem("no-such-token", 1)

    def test_concurrent_redeems_restore_once(self, clock):
        class SlowClock:
            # Widens the window between reading and removing an entry
            def __call__(self):
                time.sleep(0.005)
                return clock()

        deductor = PantryDeductor(InMemoryUndoStore(clock=SlowClock()))
        result = self._deduct(deductor)
        barrier = threading.Barrier(8)
        restored = []
        refused = []

        def redeem():
            barrier.wait()
            try:
                restored.append(deductor.redeem(result.undo_token, 1))
            except NotFoundError:
                refused.append(result.undo_token)

        threads = [threading.Thread(target=redeem) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(restored) == 1
        assert len(refused) == 7


class TestPantryItemIds:
    def test_string_ids(self, deductor):
        pantry = [
            PantryItemData(id="a1", name="Flour", quantity=500, unit="g"),
            PantryItemData(id="b2", name="Sugar", quantity=200, unit="g"),
        ]

        result = deductor.deduct(
            "user-1", _ingredients(("flour", 100), ("sugar", 50)), pantry, 1, 1
        )

        assert [(d.pantry_item_id, d.remaining) for d in result.deducted] == [("a1", 400), ("b2", 150)]
        snapshot = deductor.redeem(result.undo_token, "user-1")
        assert [(s.id, s.quantity) for s in snapshot] == [("a1", 500), ("b2", 200)]
