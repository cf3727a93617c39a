"""Ingredient stock ledger: persisted quantities, availability and all-or-nothing deduction."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Mapping

from cafe_pos.constant import DEFAULT_INGREDIENTS, DEFAULT_UNIT, FIELD_SEP
from cafe_pos.expenses import ExpenseLog
from cafe_pos.models import IngredientInfo, Shortage
from cafe_pos.persistence import is_missing_or_empty, is_unreadable, read_lines, write_lines

logger = logging.getLogger(__name__)

Recipes = Mapping[str, Mapping[str, int]]


def parse_ingredient_record(line: str) -> tuple[str, str, IngredientInfo] | None:
    """Parse ``category|name|qty|unit`` or the legacy ``category|name|qty``."""
    parts = line.split(FIELD_SEP)
    if len(parts) not in (3, 4):
        return None

    try:
        qty = int(parts[2])
    except ValueError:
        return None
    if qty < 0:
        return None

    unit = parts[3] if len(parts) == 4 else DEFAULT_UNIT
    return (parts[0], parts[1], IngredientInfo(qty=qty, unit=unit))


def format_ingredient_record(category: str, name: str, info: IngredientInfo) -> str:
    return FIELD_SEP.join((category, name, str(info.qty), info.unit))


class IngredientStore:
    """
    Category -> ingredient -> stock, backed by one flat file.

    Recipes name ingredients without a category, so lookups scan categories in
    insertion order and the first match wins. Creating a second ingredient with
    an existing name is refused to keep that lookup unambiguous.
    """

    def __init__(self, path: Path, expenses: ExpenseLog | None = None) -> None:
        self.path = Path(path)
        self.expenses = expenses
        self.skipped_lines = 0
        self._ingredients: dict[str, dict[str, IngredientInfo]] = {}

    def load(self) -> None:
        """Read the backing file, seeding and saving the defaults when it is absent or empty."""
        self._ingredients = {}
        self.skipped_lines = 0

        if is_missing_or_empty(self.path):
            for category, items in DEFAULT_INGREDIENTS.items():
                self._ingredients[category] = {
                    name: IngredientInfo(qty=qty, unit=unit) for name, (qty, unit) in items.items()
                }
            self.save()
            logger.info("inventory_seeded path=%s", self.path)
            return

        for line in read_lines(self.path):
            if not line.strip():
                continue
            parsed = None if is_unreadable(line) else parse_ingredient_record(line)
            if parsed is None:
                self.skipped_lines += 1
                continue
            category, name, info = parsed
            self._ingredients.setdefault(category, {})[name] = info

        if self.skipped_lines:
            logger.warning("inventory_malformed_lines path=%s skipped=%d", self.path, self.skipped_lines)

    def save(self) -> None:
        """Rewrite the whole backing file from memory."""
        write_lines(
            self.path,
            (
                format_ingredient_record(category, name, info)
                for category, items in self._ingredients.items()
                for name, info in items.items()
            ),
        )

    def categories(self) -> Iterator[tuple[str, dict[str, IngredientInfo]]]:
        for category, items in self._ingredients.items():
            yield category, dict(items)

    def get(self, category: str, name: str) -> IngredientInfo | None:
        return self._ingredients.get(category, {}).get(name)

    def find(self, name: str) -> tuple[str, IngredientInfo] | None:
        """Locate an ingredient by name across all categories; first match wins."""
        for category, items in self._ingredients.items():
            info = items.get(name)
            if info is not None:
                return (category, info)
        return None

    def unit_of(self, name: str, default: str = "units") -> str:
        found = self.find(name)
        if found is None:
            return default
        return found[1].unit

    def snapshot(self) -> dict[tuple[str, str], tuple[int, str]]:
        return {
            (category, name): (info.qty, info.unit)
            for category, items in self._ingredients.items()
            for name, info in items.items()
        }

    def add_or_update(self, category: str, name: str, qty: int, unit: str) -> bool:
        """Add stock to an existing entry or create a new one. Never decreases quantity."""
        category = category.strip()
        name = name.strip()
        unit = unit.strip()
        if not category or not name or qty < 0:
            return False
        if any(FIELD_SEP in field for field in (category, name, unit)):
            return False

        info = self.get(category, name)
        if info is not None:
            info.qty += qty
            if unit and not info.unit.strip():
                info.unit = unit
        else:
            existing = self.find(name)
            if existing is not None:
                logger.info("ingredient_name_taken name=%r category=%r", name, existing[0])
                return False
            self._ingredients.setdefault(category, {})[name] = IngredientInfo(qty=qty, unit=unit)

        self.save()
        logger.info("ingredient_added category=%r name=%r qty=%d", category, name, qty)
        return True

    def restock(self, category: str, name: str, qty: int, cost: Decimal) -> bool:
        """Increase an existing ingredient, persist, then log the cost as an expense."""
        info = self.get(category, name)
        if info is None or qty <= 0 or cost < 0:
            return False

        info.qty += qty
        self.save()
        if self.expenses is not None:
            self.expenses.record_restock(name, cost)
        logger.info("ingredient_restocked category=%r name=%r qty=%d cost=%s", category, name, qty, cost)
        return True

    def delete(self, category: str, name: str) -> bool:
        """Remove an entry; an emptied category goes with it. No write when nothing matched."""
        items = self._ingredients.get(category)
        if items is None or name not in items:
            return False

        del items[name]
        if not items:
            del self._ingredients[category]
        self.save()
        logger.info("ingredient_deleted category=%r name=%r", category, name)
        return True

    def _plan(
        self, recipe: Mapping[str, int], quantity: int
    ) -> tuple[list[tuple[IngredientInfo, int]], Shortage | None]:
        """Resolve each recipe line to its stock entry and the amount it needs."""
        plan: list[tuple[IngredientInfo, int]] = []
        for ingredient, amount in recipe.items():
            needed = amount * quantity
            found = self.find(ingredient)
            if found is None:
                return plan, Shortage(ingredient=ingredient, needed=needed, on_hand=None)
            info = found[1]
            if info.qty < needed:
                return plan, Shortage(ingredient=ingredient, needed=needed, on_hand=info.qty)
            plan.append((info, needed))
        return plan, None

    def find_shortage(self, item_name: str, quantity: int, recipes: Recipes) -> Shortage | None:
        """Return the first recipe line that cannot cover ``quantity`` servings, if any."""
        recipe = recipes.get(item_name)
        if not recipe:
            return None
        return self._plan(recipe, quantity)[1]

    def is_available(self, item_name: str, recipes: Recipes) -> bool:
        return self.find_shortage(item_name, 1, recipes) is None

    def deduct(self, item_name: str, quantity: int, recipes: Recipes) -> bool:
        """
        Consume the ingredients for ``quantity`` servings of an item.

        Every recipe line is checked before any stock changes; if one line is
        short nothing is deducted. On success all lines are decremented and the
        store is saved once. If that save fails the decrements are undone and
        the error propagates. An item without a recipe deducts nothing.
        """
        if quantity <= 0:
            return False

        recipe = recipes.get(item_name)
        if not recipe:
            return True

        plan, shortage = self._plan(recipe, quantity)
        if shortage is not None:
            logger.info("deduct_refused item=%r qty=%d reason=%r", item_name, quantity, shortage.describe())
            return False

        self._apply(plan, -1)
        logger.info("deducted item=%r qty=%d", item_name, quantity)
        return True

    def restore(self, item_name: str, quantity: int, recipes: Recipes) -> None:
        """Put back what ``deduct`` took for the same item and quantity."""
        recipe = recipes.get(item_name)
        if not recipe or quantity <= 0:
            return

        plan: list[tuple[IngredientInfo, int]] = []
        for ingredient, amount in recipe.items():
            found = self.find(ingredient)
            if found is not None:
                plan.append((found[1], amount * quantity))
        self._apply(plan, 1)
        logger.info("restored item=%r qty=%d", item_name, quantity)

    def _apply(self, plan: list[tuple[IngredientInfo, int]], sign: int) -> None:
        for info, amount in plan:
            info.qty += sign * amount
        try:
            self.save()
        except OSError:
            for info, amount in plan:
                info.qty -= sign * amount
            raise
