"""Append-only expense log fed by ingredient restocks."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from cafe_pos.constant import CURRENCY
from cafe_pos.persistence import append_line, read_lines, read_money_after

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%m/%d/%Y %I:%M:%S %p"


def format_expense_line(item_name: str, cost: Decimal, when: datetime) -> str:
    return f"{when.strftime(TIMESTAMP_FORMAT)} | Restock: {item_name} | {CURRENCY}{cost:,.2f}"


class ExpenseLog:
    """Restock costs, one free-text line each."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def record_restock(self, item_name: str, cost: Decimal, when: datetime | None = None) -> str:
        line = format_expense_line(item_name, Decimal(cost), when or datetime.now())
        append_line(self.path, line)
        logger.info("expense_recorded item=%r cost=%s", item_name, cost)
        return line

    def lines(self) -> list[str]:
        return read_lines(self.path)

    def total(self) -> Decimal:
        total = Decimal("0")
        for line in self.lines():
            amount = read_money_after(line)
            if amount is not None:
                total += amount
        return total
