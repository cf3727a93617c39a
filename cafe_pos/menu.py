"""Menu catalog: item name -> price."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from cafe_pos.constant import DEFAULT_MENU, FIELD_SEP
from cafe_pos.persistence import is_missing_or_empty, is_unreadable, read_lines, write_lines

logger = logging.getLogger(__name__)


def parse_price(raw: str) -> Decimal | None:
    """Parse a positive price, or None."""
    try:
        price = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0:
        return None
    return price


class MenuCatalog:
    """Priced menu items in display order."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.skipped_lines = 0
        self._prices: dict[str, Decimal] = {}

    def load(self) -> None:
        self._prices = {}
        self.skipped_lines = 0

        if is_missing_or_empty(self.path):
            self._prices = {name: Decimal(price) for name, price in DEFAULT_MENU.items()}
            self.save()
            logger.info("menu_seeded path=%s", self.path)
            return

        for line in read_lines(self.path):
            if not line.strip():
                continue
            parts = line.split(FIELD_SEP)
            price = parse_price(parts[1]) if len(parts) == 2 and not is_unreadable(line) else None
            if price is None:
                self.skipped_lines += 1
                continue
            self._prices[parts[0]] = price

        if self.skipped_lines:
            logger.warning("menu_malformed_lines path=%s skipped=%d", self.path, self.skipped_lines)

    def save(self) -> None:
        write_lines(self.path, (f"{name}{FIELD_SEP}{price}" for name, price in self._prices.items()))

    def items(self) -> list[tuple[str, Decimal]]:
        return list(self._prices.items())

    def names(self) -> list[str]:
        return list(self._prices)

    def price_of(self, name: str) -> Decimal | None:
        return self._prices.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._prices

    def add(self, name: str, price: Decimal) -> bool:
        name = name.strip()
        if not name or FIELD_SEP in name or name in self._prices or price <= 0:
            return False
        self._prices[name] = price
        self.save()
        logger.info("menu_item_added name=%r price=%s", name, price)
        return True

    def set_price(self, name: str, price: Decimal) -> bool:
        if name not in self._prices or price <= 0:
            return False
        self._prices[name] = price
        self.save()
        logger.info("menu_price_updated name=%r price=%s", name, price)
        return True

    def remove(self, name: str) -> bool:
        if name not in self._prices:
            return False
        del self._prices[name]
        self.save()
        logger.info("menu_item_removed name=%r", name)
        return True
