"""Cart handling and checkout on top of the ingredient ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from cafe_pos.context import CafeContext
from cafe_pos.models import CartLine, SaleRecord, Shortage
from cafe_pos.receipt import format_receipt, save_receipt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddOutcome:
    """Result of putting an item in the cart; a refusal leaves the cart untouched."""

    added: bool
    message: str
    shortage: Shortage | None = None


@dataclass
class Checkout:
    sales: list[SaleRecord] = field(default_factory=list)
    rejected: list[tuple[CartLine, Shortage | None]] = field(default_factory=list)
    receipt: str = ""

    @property
    def grand_total(self) -> Decimal:
        return sum((sale.total for sale in self.sales), Decimal("0"))


class OrderSession:
    """One operator's running cart."""

    def __init__(self, context: CafeContext, operator: str) -> None:
        self.context = context
        self.operator = operator
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.total for line in self._lines), Decimal("0"))

    def quantity_in_cart(self, item_name: str) -> int:
        return sum(line.quantity for line in self._lines if line.item_name == item_name)

    def add(self, item_name: str, quantity: int) -> AddOutcome:
        price = self.context.menu.price_of(item_name)
        if price is None:
            return AddOutcome(False, f"{item_name} is not on the menu")
        if quantity <= 0:
            return AddOutcome(False, "Quantity must be a positive number")

        wanted = self.quantity_in_cart(item_name) + quantity
        shortage = self.context.inventory.find_shortage(item_name, wanted, self.context.recipes)
        if shortage is not None:
            logger.info("cart_refused item=%r qty=%d reason=%r", item_name, wanted, shortage.describe())
            return AddOutcome(False, f"OUT OF STOCK: {shortage.describe()}", shortage)

        self._lines.append(CartLine(item_name=item_name, quantity=quantity, unit_price=price))
        return AddOutcome(True, f"Added {item_name} x{quantity}")

    def remove(self, index: int) -> bool:
        if not (0 <= index < len(self._lines)):
            return False
        del self._lines[index]
        return True

    def clear(self) -> None:
        self._lines.clear()

    def checkout(self, now: datetime | None = None) -> Checkout:
        """
        Deduct and record each cart line; lines that cannot be made are skipped.

        A line leaves the cart once it is sold or rejected. If a write fails the
        error propagates, the failing line's stock is put back, and only the
        lines not yet processed stay in the cart for a retry.
        """
        if not self._lines:
            raise ValueError("Cannot check out an empty cart")

        now = now or datetime.now()
        inventory = self.context.inventory
        recipes = self.context.recipes
        result = Checkout()
        sold: list[CartLine] = []

        while self._lines:
            line = self._lines[0]
            if not inventory.deduct(line.item_name, line.quantity, recipes):
                result.rejected.append((line, inventory.find_shortage(line.item_name, line.quantity, recipes)))
                self._lines.pop(0)
                continue
            try:
                sale = self.context.sales.record(line.item_name, line.quantity, line.total, self.operator, when=now)
            except OSError:
                logger.warning("sale_record_failed item=%r qty=%d", line.item_name, line.quantity)
                inventory.restore(line.item_name, line.quantity, recipes)
                raise
            self._lines.pop(0)
            result.sales.append(sale)
            sold.append(line)

        if sold:
            result.receipt = format_receipt(sold, self.operator, now)
            save_receipt(self.context.receipts_path, result.receipt)

        logger.info(
            "checkout operator=%r sold=%d rejected=%d total=%s",
            self.operator,
            len(result.sales),
            len(result.rejected),
            result.grand_total,
        )
        return result
