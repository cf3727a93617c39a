"""Recipe catalog: menu item -> ingredient -> amount per serving."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Iterator

from cafe_pos.constant import DEFAULT_RECIPES, FIELD_SEP
from cafe_pos.persistence import is_missing_or_empty, is_unreadable, read_lines, write_lines

logger = logging.getLogger(__name__)

_LINE_SEP = ";"
_AMOUNT_SEP = "="


def parse_recipe_record(line: str) -> tuple[str, dict[str, int]] | None:
    """Parse ``item|ing=amt;ing=amt``; malformed pairs are dropped."""
    parts = line.split(FIELD_SEP)
    if len(parts) != 2:
        return None

    name, body = parts
    recipe: dict[str, int] = {}
    for raw in body.split(_LINE_SEP):
        pair = raw.split(_AMOUNT_SEP)
        if len(pair) != 2:
            continue
        try:
            amount = int(pair[1])
        except ValueError:
            continue
        if amount > 0:
            recipe[pair[0]] = amount
    return (name, recipe)


def format_recipe_record(name: str, recipe: Mapping[str, int]) -> str:
    body = _LINE_SEP.join(f"{ingredient}{_AMOUNT_SEP}{amount}" for ingredient, amount in recipe.items())
    return f"{name}{FIELD_SEP}{body}"


class RecipeCatalog(Mapping[str, dict[str, int]]):
    """Read-only mapping view over the recipes, with CRUD that rewrites the file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.skipped_lines = 0
        self._recipes: dict[str, dict[str, int]] = {}

    def __getitem__(self, name: str) -> dict[str, int]:
        return self._recipes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def load(self) -> None:
        self._recipes = {}
        self.skipped_lines = 0

        if is_missing_or_empty(self.path):
            self._recipes = {name: dict(recipe) for name, recipe in DEFAULT_RECIPES.items()}
            self.save()
            logger.info("recipes_seeded path=%s", self.path)
            return

        for line in read_lines(self.path):
            if not line.strip():
                continue
            parsed = None if is_unreadable(line) else parse_recipe_record(line)
            if parsed is None:
                self.skipped_lines += 1
                continue
            name, recipe = parsed
            self._recipes[name] = recipe

        if self.skipped_lines:
            logger.warning("recipes_malformed_lines path=%s skipped=%d", self.path, self.skipped_lines)

    def save(self) -> None:
        write_lines(self.path, (format_recipe_record(name, recipe) for name, recipe in self._recipes.items()))

    def set(self, name: str, recipe: Mapping[str, int]) -> bool:
        """Define or replace an item's recipe. Every amount must be a positive integer."""
        name = name.strip()
        if not name or FIELD_SEP in name or any(amount <= 0 for amount in recipe.values()):
            return False
        if any(sep in ingredient for ingredient in recipe for sep in (FIELD_SEP, _LINE_SEP, _AMOUNT_SEP)):
            return False

        self._recipes[name] = dict(recipe)
        self.save()
        logger.info("recipe_set item=%r lines=%d", name, len(recipe))
        return True

    def remove(self, name: str) -> bool:
        if name not in self._recipes:
            return False

        del self._recipes[name]
        self.save()
        logger.info("recipe_removed item=%r", name)
        return True
