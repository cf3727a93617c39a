"""Time-windowed sales reports and the boss financial snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable

from cafe_pos.constant import CURRENCY
from cafe_pos.context import CafeContext
from cafe_pos.models import SaleRecord
from cafe_pos.persistence import write_lines

logger = logging.getLogger(__name__)


class TimeFrame(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def in_window(when: datetime, timeframe: TimeFrame, now: datetime) -> bool:
    """Whether a sale falls in the current day, Monday-Sunday week, month or year."""
    if timeframe is TimeFrame.DAILY:
        return when.date() == now.date()
    if timeframe is TimeFrame.WEEKLY:
        start = _week_start(now.date())
        return start <= when.date() <= start + timedelta(days=6)
    if timeframe is TimeFrame.MONTHLY:
        return (when.year, when.month) == (now.year, now.month)
    if timeframe is TimeFrame.YEARLY:
        return when.year == now.year
    raise ValueError(f"Unknown timeframe: {timeframe!r}")


@dataclass
class SalesReport:
    timeframe: TimeFrame
    generated_at: datetime
    rows: list[SaleRecord] = field(default_factory=list)
    total_sales: Decimal = Decimal("0")
    best_item: str | None = None
    best_quantity: int = 0

    @property
    def period_header(self) -> str:
        if self.timeframe is TimeFrame.DAILY:
            return f"DAY: {self.generated_at:%m/%d/%Y}"
        if self.timeframe is TimeFrame.WEEKLY:
            return "WEEKLY SALES REPORT"
        if self.timeframe is TimeFrame.MONTHLY:
            return f"MONTH: {self.generated_at:%B}"
        return f"YEAR: {self.generated_at:%Y}"


def build_sales_report(
    records: Iterable[SaleRecord],
    timeframe: TimeFrame,
    now: datetime | None = None,
) -> SalesReport:
    now = now or datetime.now()
    report = SalesReport(timeframe=timeframe, generated_at=now)
    quantities: dict[str, int] = {}

    for record in records:
        if not in_window(record.timestamp, timeframe, now):
            continue
        report.rows.append(record)
        report.total_sales += record.total
        quantities[record.item_name] = quantities.get(record.item_name, 0) + record.quantity

    if quantities:
        # max() keeps the first item on ties, i.e. the one sold earliest.
        report.best_item, report.best_quantity = max(quantities.items(), key=lambda kv: kv[1])
    return report


def render_sales_report(report: SalesReport) -> str:
    item_width = max([4, *(len(row.item_name) for row in report.rows)])
    header = f"| DATE       | TIME     | {'ITEM'.ljust(item_width)} | QTY |"
    separator = "-" * len(header)

    table = [separator, header, separator]
    for row in report.rows:
        table.append(
            f"| {row.timestamp:%m/%d/%Y} | {row.timestamp:%I:%M %p} | {row.item_name.ljust(item_width)} | {row.quantity:<3} |"
        )
    table.append(separator)
    table.append(f"TOTAL SALES: {CURRENCY}{report.total_sales:,.2f}")
    table.append(f"BEST-SELLING: {report.best_item or 'N/A'} ({report.best_quantity})")
    table.append(separator)

    lines = [
        "=" * 40,
        "SALES REPORT".center(40).rstrip(),
        "=" * 40,
        report.period_header,
        "-" * 40,
        *table,
        "=" * 40,
    ]
    return "\n".join(lines)


def save_sales_report(report: SalesReport, data_dir: Path) -> Path:
    """Overwrite ``<timeframe>_report.txt`` with the rendered report."""
    path = Path(data_dir) / f"{report.timeframe.value}_report.txt"
    write_lines(path, render_sales_report(report).splitlines())
    logger.info("report_saved timeframe=%s rows=%d path=%s", report.timeframe.value, len(report.rows), path)
    return path


@dataclass(frozen=True)
class FinancialSnapshot:
    revenue: Decimal
    expenses: Decimal
    staff_salary: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.revenue - (self.expenses + self.staff_salary)


def financial_snapshot(context: CafeContext) -> FinancialSnapshot:
    revenue = sum((record.total for record in context.sales.records()), Decimal("0"))
    return FinancialSnapshot(
        revenue=revenue,
        expenses=context.expenses.total(),
        staff_salary=context.accounts.total_staff_salary(),
    )
