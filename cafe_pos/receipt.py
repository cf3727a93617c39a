"""Plain-text receipts appended to the receipts file."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from cafe_pos.constant import CURRENCY
from cafe_pos.models import CartLine
from cafe_pos.persistence import append_text

_RULE = "=" * 42
_THIN_RULE = "-" * 42
_TOTAL_WIDTH = 32


def _money(amount: Decimal) -> str:
    return f"{CURRENCY}{amount:,.2f}"


def format_receipt(lines: Iterable[CartLine], operator: str, when: datetime) -> str:
    lines = list(lines)
    grand_total = sum((line.total for line in lines), Decimal("0"))

    out = [
        "",
        _RULE,
        "CAFE RECEIPT".center(42).rstrip(),
        _RULE,
        f"Date: {when.month}/{when.day}/{when.year} {when.strftime('%I:%M:%S %p')}",
        f"Served By: {operator}",
        _THIN_RULE,
        f"{'Item':<20} {'Qty':>5} {'Total':>10}",
        _THIN_RULE,
    ]
    out.extend(f"{line.item_name:<20} {line.quantity:>5} {_money(line.total):>10}" for line in lines)
    out.append(_RULE)

    label = "GRAND TOTAL:"
    value = _money(grand_total)
    padding = max(1, _TOTAL_WIDTH - len(label) - len(value))
    out.append(f"{label}{' ' * padding}{value}")
    out.extend([_RULE, "THANK YOU FOR YOUR ORDER!".center(42).rstrip(), _RULE, "", ""])
    return "\n".join(out)


def save_receipt(path: Path, receipt: str) -> None:
    append_text(path, receipt)
