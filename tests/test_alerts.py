from datetime import datetime
from pathlib import Path

from cafe_pos.alerts import AlertBoard


def test_post_read_and_clear(tmp_path: Path) -> None:
    board = AlertBoard(tmp_path / "reports.txt")
    when = datetime(2026, 10, 19, 14, 5, 9)

    assert board.post("  milk   is  spoiled ", when=when) is True
    assert board.post("   ") is False
    assert board.post("grinder jammed", when=when, source="barista") is True

    assert board.all() == [
        "[CASHIER ALERT] 10/19/2026 02:05:09 PM: milk is spoiled",
        "[BARISTA ALERT] 10/19/2026 02:05:09 PM: grinder jammed",
    ]

    board.clear()
    assert board.all() == []
    assert (tmp_path / "reports.txt").read_text(encoding="utf-8") == ""


def test_missing_file_reads_as_no_alerts(tmp_path: Path) -> None:
    assert AlertBoard(tmp_path / "reports.txt").all() == []
