from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from cafe_pos.context import CafeContext
from cafe_pos.expenses import ExpenseLog
from cafe_pos.models import SaleRecord
from cafe_pos.reports import (
    TimeFrame,
    build_sales_report,
    financial_snapshot,
    in_window,
    render_sales_report,
    save_sales_report,
)

# Wednesday.
NOW = datetime(2026, 10, 21, 12, 0, 0)


def _sale(sale_id: int, when: datetime, item: str, qty: int, total: str) -> SaleRecord:
    return SaleRecord(
        sale_id=sale_id,
        item_name=item,
        quantity=qty,
        total=Decimal(total),
        timestamp=when,
        operator="cashier",
    )


@pytest.mark.parametrize(
    ("when", "timeframe", "expected"),
    [
        (datetime(2026, 10, 19, 7, 0), TimeFrame.WEEKLY, True),
        (datetime(2026, 10, 25, 23, 59), TimeFrame.WEEKLY, True),
        (datetime(2026, 10, 18, 23, 59), TimeFrame.WEEKLY, False),
        (datetime(2026, 10, 21, 0, 1), TimeFrame.DAILY, True),
        (datetime(2026, 10, 20, 23, 59), TimeFrame.DAILY, False),
        (datetime(2026, 10, 1, 0, 0), TimeFrame.MONTHLY, True),
        (datetime(2025, 10, 21, 12, 0), TimeFrame.MONTHLY, False),
        (datetime(2026, 1, 1, 0, 0), TimeFrame.YEARLY, True),
        (datetime(2025, 12, 31, 23, 59), TimeFrame.YEARLY, False),
    ],
)
def test_in_window(when: datetime, timeframe: TimeFrame, expected: bool) -> None:
    assert in_window(when, timeframe, NOW) is expected


def test_weekly_report_totals_and_best_seller() -> None:
    records = [
        _sale(1, datetime(2026, 10, 12, 9, 0), "Hot Coffee", 9, "810"),
        _sale(2, datetime(2026, 10, 19, 9, 0), "Iced Latte", 2, "260"),
        _sale(3, datetime(2026, 10, 20, 9, 0), "Hot Coffee", 1, "90"),
        _sale(4, datetime(2026, 10, 21, 9, 0), "Hot Coffee", 1, "90"),
    ]

    report = build_sales_report(records, TimeFrame.WEEKLY, now=NOW)

    assert [row.sale_id for row in report.rows] == [2, 3, 4]
    assert report.total_sales == Decimal("440")
    # Tie on quantity: the item sold first wins.
    assert (report.best_item, report.best_quantity) == ("Iced Latte", 2)


def test_rendered_report_layout(tmp_path: Path) -> None:
    records = [_sale(1, datetime(2026, 10, 21, 9, 5), "Brown Sugar Latte", 3, "1420")]
    report = build_sales_report(records, TimeFrame.MONTHLY, now=NOW)

    text = render_sales_report(report)

    assert "MONTH: October" in text
    assert "| DATE       | TIME     | ITEM              | QTY |" in text
    assert "| 10/21/2026 | 09:05 AM | Brown Sugar Latte | 3   |" in text
    assert "TOTAL SALES: ₱1,420.00" in text
    assert "BEST-SELLING: Brown Sugar Latte (3)" in text

    path = save_sales_report(report, tmp_path)
    assert path.name == "monthly_report.txt"
    assert path.read_text(encoding="utf-8") == text + "\n"


def test_empty_report_has_no_best_seller() -> None:
    report = build_sales_report([], TimeFrame.YEARLY, now=NOW)

    assert report.rows == []
    assert "BEST-SELLING: N/A (0)" in render_sales_report(report)


def test_expense_total_reads_amounts_after_currency(tmp_path: Path) -> None:
    path = tmp_path / "expenses.txt"
    path.write_text(
        "10/1/2026 9:00:00 AM | Restock: Milk | ₱1,250.50\n"
        "free text without amount\n"
        "10/2/2026 | Restock: Cups | ₱ 99\n",
        encoding="utf-8",
    )

    assert ExpenseLog(path).total() == Decimal("1349.50")


def test_financial_snapshot(tmp_path: Path) -> None:
    context = CafeContext.open(tmp_path)
    context.accounts.register("barista", "ben", "pw", Decimal("1000"))
    context.inventory.restock("Dairy", "Milk", 500, Decimal("300"))
    context.sales.record("Hot Coffee", 2, Decimal("180"), "cashier", when=NOW)
    context.sales.record("Matcha Milk", 1, Decimal("120"), "cashier", when=NOW)

    snapshot = financial_snapshot(context)

    assert snapshot.revenue == Decimal("300")
    assert snapshot.expenses == Decimal("300")
    assert snapshot.staff_salary == Decimal("1000")
    assert snapshot.net_profit == Decimal("-1000")
