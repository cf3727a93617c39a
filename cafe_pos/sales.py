"""Append-only sale log with id recovery and pending/completed status."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from cafe_pos.constant import CURRENCY
from cafe_pos.models import SaleRecord, SaleStatus
from cafe_pos.persistence import append_line, is_unreadable, read_lines

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%m/%d/%Y %I:%M:%S %p"
FIRST_SALE_ID = 1

# The status is always the last token on the line.
_PENDING_SUFFIX = f" | [{SaleStatus.PENDING.value}]"
_COMPLETED_SUFFIX = f" | [{SaleStatus.COMPLETED.value}]"

# Sale #12 - 10/19/2026 02:30:15 PM - Hot Coffee x2 = ₱180.00 (By: Cashier) | [PENDING]
_SALE_LINE = re.compile(
    r"^Sale #(?P<id>\d+) - (?P<when>.+?) - (?P<item>.+) x(?P<qty>\d+) = "
    + re.escape(CURRENCY)
    + r"(?P<total>[\d,]+(?:\.\d+)?) \(By: (?P<operator>.*)\) \| \[(?P<status>PENDING|COMPLETED)\]"
)


def format_sale_line(record: SaleRecord) -> str:
    return (
        f"Sale #{record.sale_id} - {record.timestamp.strftime(TIMESTAMP_FORMAT)} - "
        f"{record.item_name} x{record.quantity} = {CURRENCY}{record.total:.2f} "
        f"(By: {record.operator}) | [{record.status.value}]"
    )


def extract_sale_id(line: str) -> int | None:
    """Read the id between the first ``#`` and the first `` -``."""
    start = line.find("#") + 1
    end = line.find(" -")
    if start <= 0 or end <= start:
        return None
    try:
        return int(line[start:end])
    except ValueError:
        return None


def _parse_timestamp(raw: str) -> datetime | None:
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_sale_line(line: str) -> SaleRecord | None:
    """Parse one sale log line; None when it does not have the sale shape."""
    match = _SALE_LINE.match(line)
    if match is None:
        return None

    timestamp = _parse_timestamp(match["when"])
    if timestamp is None:
        return None
    try:
        total = Decimal(match["total"].replace(",", ""))
    except InvalidOperation:
        return None

    return SaleRecord(
        sale_id=int(match["id"]),
        item_name=match["item"],
        quantity=int(match["qty"]),
        total=total,
        timestamp=timestamp,
        operator=match["operator"],
        status=SaleStatus(match["status"]),
    )


class SaleLedger:
    """The sale log file plus the in-memory next-id counter."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._next_id = FIRST_SALE_ID
        self.recover_next_id()

    @property
    def next_id(self) -> int:
        return self._next_id

    def recover_next_id(self) -> int:
        """Seed the counter from the last written line; fall back to the first id."""
        last_line = next((line for line in reversed(self.lines()) if line.strip()), None)
        if last_line is None:
            self._next_id = FIRST_SALE_ID
            return self._next_id

        last_id = None if is_unreadable(last_line) else extract_sale_id(last_line)
        if last_id is None:
            logger.warning("sale_id_recovery_failed path=%s line=%r", self.path, last_line)
            self._next_id = FIRST_SALE_ID
        else:
            self._next_id = last_id + 1
        return self._next_id

    def record(
        self,
        item_name: str,
        quantity: int,
        total: Decimal,
        operator: str,
        when: datetime | None = None,
    ) -> SaleRecord:
        """Assign the next id and append one pending line."""
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        record = SaleRecord(
            sale_id=self._next_id,
            item_name=item_name,
            quantity=quantity,
            total=Decimal(total),
            timestamp=(when or datetime.now()).replace(microsecond=0),
            operator=operator,
        )
        append_line(self.path, format_sale_line(record))
        self._next_id += 1
        logger.info("sale_recorded id=%d item=%r qty=%d total=%s", record.sale_id, item_name, quantity, record.total)
        return record

    def mark_complete(self, sale_id: int) -> bool:
        """Flip the first pending line with this id to completed, rewriting the file."""
        if not self.path.is_file():
            return False

        # surrogateescape round-trips bytes that are not UTF-8 untouched.
        with self.path.open(encoding="utf-8", errors="surrogateescape", newline="") as fh:
            lines = fh.read().splitlines(keepends=True)

        for idx, line in enumerate(lines):
            body = line.rstrip("\r\n")
            if extract_sale_id(body) == sale_id and body.endswith(_PENDING_SUFFIX):
                head = body[: -len(_PENDING_SUFFIX)]
                lines[idx] = f"{head}{_COMPLETED_SUFFIX}{line[len(body):]}"
                break
        else:
            return False

        with self.path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as fh:
            fh.write("".join(lines))
        logger.info("sale_completed id=%d", sale_id)
        return True

    def lines(self) -> list[str]:
        return read_lines(self.path)

    def records(self) -> list[SaleRecord]:
        parsed = [parse_sale_line(line) for line in self.lines()]
        return [record for record in parsed if record is not None]

    def pending(self) -> list[SaleRecord]:
        return [record for record in self.records() if record.status is SaleStatus.PENDING]
