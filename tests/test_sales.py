from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from cafe_pos.models import SaleStatus
from cafe_pos.sales import SaleLedger, extract_sale_id, parse_sale_line

WHEN = datetime(2026, 10, 19, 14, 30, 15)


def _make_ledger(tmp_path: Path, body: str | None = None) -> SaleLedger:
    path = tmp_path / "sales.txt"
    if body is not None:
        path.write_text(body, encoding="utf-8")
    return SaleLedger(path)


def _record_sales(ledger: SaleLedger, count: int) -> None:
    for idx in range(count):
        ledger.record("Hot Coffee", idx + 1, Decimal("90") * (idx + 1), "cashier", when=WHEN)


def test_record_appends_pending_line_in_log_shape(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)

    sale = ledger.record("Hot Coffee", 2, Decimal("180"), "cashier", when=WHEN)

    assert sale.sale_id == 1
    assert sale.status is SaleStatus.PENDING
    assert (tmp_path / "sales.txt").read_text(encoding="utf-8") == (
        "Sale #1 - 10/19/2026 02:30:15 PM - Hot Coffee x2 = ₱180.00 (By: cashier) | [PENDING]\n"
    )


def test_ids_are_recovered_after_restart(tmp_path: Path) -> None:
    _record_sales(_make_ledger(tmp_path), 5)

    restarted = _make_ledger(tmp_path)

    assert restarted.next_id == 6
    assert restarted.record("Iced Latte", 1, Decimal("130"), "cashier", when=WHEN).sale_id == 6


@pytest.mark.parametrize("body", [None, "", "\n\n", "garbage without an id\n", "Sale #abc - broken\n"])
def test_id_recovery_falls_back_to_one(tmp_path: Path, body: str | None) -> None:
    assert _make_ledger(tmp_path, body).next_id == 1


def test_id_recovery_reads_last_line_only(tmp_path: Path) -> None:
    _record_sales(_make_ledger(tmp_path), 3)
    with (tmp_path / "sales.txt").open("a", encoding="utf-8") as fh:
        fh.write("this line was cut off by a cra\n")

    assert _make_ledger(tmp_path).next_id == 1


def test_extract_sale_id_uses_hash_and_first_dash() -> None:
    assert extract_sale_id("Sale #42 - 1/2/2026 9:00:00 AM - Tea x1 = ₱50 (By: x) | [PENDING]") == 42
    assert extract_sale_id("Sale 42 - no hash") is None
    assert extract_sale_id("Sale #42") is None


def test_parse_sale_line_accepts_legacy_lines() -> None:
    record = parse_sale_line(
        "Sale #7 - 10/19/2026 9:05:00 AM - Brown Sugar Latte x3 = ₱1,420.5 (By: Kiosk-Customer) | [COMPLETED] ✅"
    )

    assert record is not None
    assert record.sale_id == 7
    assert record.item_name == "Brown Sugar Latte"
    assert record.quantity == 3
    assert record.total == Decimal("1420.5")
    assert record.timestamp == datetime(2026, 10, 19, 9, 5)
    assert record.operator == "Kiosk-Customer"
    assert record.status is SaleStatus.COMPLETED


def test_mark_complete_flips_exactly_one_line(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)
    _record_sales(ledger, 12)
    before = (tmp_path / "sales.txt").read_bytes().splitlines(keepends=True)

    assert ledger.mark_complete(1) is True

    after = (tmp_path / "sales.txt").read_bytes().splitlines(keepends=True)
    changed = [idx for idx, (old, new) in enumerate(zip(before, after)) if old != new]
    assert changed == [0]
    assert after[0] == before[0].replace(b"[PENDING]", b"[COMPLETED]")
    assert len(after) == len(before)


def test_mark_complete_twice_is_not_found(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)
    _record_sales(ledger, 3)
    assert ledger.mark_complete(2) is True
    snapshot = (tmp_path / "sales.txt").read_bytes()

    assert ledger.mark_complete(2) is False
    assert ledger.mark_complete(99) is False
    assert (tmp_path / "sales.txt").read_bytes() == snapshot


def test_mark_complete_preserves_other_line_endings(tmp_path: Path) -> None:
    body = (
        "Sale #1 - 10/19/2026 02:30:15 PM - Tea x1 = ₱50.00 (By: a) | [PENDING]\r\n"
        "Sale #2 - 10/19/2026 02:31:15 PM - Tea x1 = ₱50.00 (By: a) | [PENDING]\r\n"
    )
    ledger = _make_ledger(tmp_path, body)

    assert ledger.mark_complete(2) is True

    assert (tmp_path / "sales.txt").read_bytes().decode("utf-8") == (
        "Sale #1 - 10/19/2026 02:30:15 PM - Tea x1 = ₱50.00 (By: a) | [PENDING]\r\n"
        "Sale #2 - 10/19/2026 02:31:15 PM - Tea x1 = ₱50.00 (By: a) | [COMPLETED]\r\n"
    )


def test_records_and_pending_skip_unparseable_lines(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)
    _record_sales(ledger, 3)
    with (tmp_path / "sales.txt").open("a", encoding="utf-8") as fh:
        fh.write("scribbled note\n")
    ledger.mark_complete(1)

    assert [record.sale_id for record in ledger.records()] == [1, 2, 3]
    assert [record.sale_id for record in ledger.pending()] == [2, 3]
    assert len(ledger.lines()) == 4


def test_record_rejects_non_positive_quantity(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)
    with pytest.raises(ValueError):
        ledger.record("Hot Coffee", 0, Decimal("0"), "cashier")
    assert ledger.next_id == 1


def test_undecodable_last_line_falls_back_to_first_id(tmp_path: Path) -> None:
    path = tmp_path / "sales.txt"
    path.write_bytes(
        "Sale #5 - 10/19/2026 02:30:15 PM - Tea x1 = ₱50.00 (By: a) | [PENDING]\n".encode("utf-8") + b"\xff\xfe\n"
    )

    assert SaleLedger(path).next_id == 1


def test_mark_complete_only_touches_trailing_status(tmp_path: Path) -> None:
    ledger = _make_ledger(tmp_path)
    ledger.record("Tea [PENDING] Special", 1, Decimal("50"), "cashier", when=WHEN)

    assert ledger.mark_complete(1) is True
    assert ledger.mark_complete(1) is False

    line = (tmp_path / "sales.txt").read_text(encoding="utf-8")
    assert line.endswith("Tea [PENDING] Special x1 = ₱50.00 (By: cashier) | [COMPLETED]\n")
    assert ledger.records()[0].status is SaleStatus.COMPLETED


def test_mark_complete_keeps_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "sales.txt"
    pending = "Sale #1 - 10/19/2026 02:30:15 PM - Tea x1 = ₱50.00 (By: a) | [PENDING]\n".encode("utf-8")
    path.write_bytes(b"\xff\xfe junk\n" + pending)

    assert SaleLedger(path).mark_complete(1) is True

    assert path.read_bytes() == b"\xff\xfe junk\n" + pending.replace(b"[PENDING]", b"[COMPLETED]")
