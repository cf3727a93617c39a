"""Domain models for cafe-pos."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from cafe_pos.constant import ADMIN_ROLES, DEFAULT_UNIT, FIELD_SEP


class SaleStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


@dataclass
class IngredientInfo:
    """Stock on hand for one ingredient."""

    qty: int = 0
    unit: str = DEFAULT_UNIT


@dataclass(frozen=True)
class Shortage:
    """The recipe line that blocks a sale; on_hand is None when the ingredient is not stocked."""

    ingredient: str
    needed: int
    on_hand: int | None

    def describe(self) -> str:
        if self.on_hand is None:
            return f"{self.ingredient} is not in the inventory"
        return f"Not enough {self.ingredient} (need {self.needed}, have {self.on_hand})"


@dataclass
class SaleRecord:
    """One line of the sale log."""

    sale_id: int
    item_name: str
    quantity: int
    total: Decimal
    timestamp: datetime
    operator: str
    status: SaleStatus = SaleStatus.PENDING


@dataclass(frozen=True)
class CartLine:
    """A menu item and quantity waiting for checkout."""

    item_name: str
    quantity: int
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Account:
    role: str
    username: str
    password: str
    salary: Decimal = Decimal("0")

    @property
    def is_admin(self) -> bool:
        return self.role.lower() in ADMIN_ROLES

    def to_record(self) -> str:
        fields = [self.role, self.username, self.password]
        if not self.is_admin:
            fields.append(str(self.salary))
        return FIELD_SEP.join(fields)
