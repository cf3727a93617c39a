from decimal import Decimal
from pathlib import Path

import pytest

from cafe_pos.accounts import AccountBook, parse_salary, role_permits


def _make_book(tmp_path: Path, body: str | None = None) -> AccountBook:
    path = tmp_path / "accounts.txt"
    if body is not None:
        path.write_text(body, encoding="utf-8")
    book = AccountBook(path)
    book.load()
    return book


@pytest.mark.parametrize(
    ("role", "required", "expected"),
    [
        ("cashier", "cashier", True),
        ("barista", "cashier", False),
        ("boss", "cashier", True),
        ("owner", "barista", True),
        (" Cashier ", "cashier", True),
        ("cashier", "boss", False),
    ],
)
def test_role_permits(role: str, required: str, expected: bool) -> None:
    assert role_permits(role, required) is expected


def test_empty_book_seeds_admin(tmp_path: Path) -> None:
    book = _make_book(tmp_path)

    assert (tmp_path / "accounts.txt").read_text(encoding="utf-8") == "boss|admin|1234\n"
    assert book.authenticate("admin", "1234", "boss") is not None
    assert book.authenticate("admin", "1234", "barista") is not None
    assert book.authenticate("admin", "wrong", "boss") is None


def test_authenticate_checks_role(tmp_path: Path) -> None:
    book = _make_book(tmp_path, body="boss|admin|1234\ncashier| ana |pw1 |1500\n")

    assert book.authenticate("ana", "pw1", "cashier").username == "ana"
    assert book.authenticate("ana", "pw1", "barista") is None
    assert book.authenticate("ana", "pw1", "boss") is None
    assert book.authenticate("nobody", "pw1", "cashier") is None


def test_register_appends_and_forces_admin_salary(tmp_path: Path) -> None:
    book = _make_book(tmp_path)

    assert book.register("cashier", "ana", "pw1", Decimal("1500")) is not None
    assert book.register("owner", "olga", "pw2", Decimal("9999")).salary == Decimal("0")
    assert book.register("cashier", "ana", "again", Decimal("1")) is None
    assert book.register("janitor", "jo", "pw", Decimal("1")) is None

    assert (tmp_path / "accounts.txt").read_text(encoding="utf-8").splitlines() == [
        "boss|admin|1234",
        "cashier|ana|pw1|1500",
        "owner|olga|pw2",
    ]


def test_remove_staff_and_salary_total(tmp_path: Path) -> None:
    book = _make_book(
        tmp_path,
        body="boss|admin|1234\ncashier|ana|pw|1500\nbarista|ben|pw|1200.50\nstaff|cy|pw|oops\n",
    )
    assert book.total_staff_salary() == Decimal("2700.50")

    assert book.remove_staff("admin") is False
    assert book.remove_staff("ben") is True
    assert book.remove_staff("ben") is False
    assert book.total_staff_salary() == Decimal("1500")
    assert "ben" not in (tmp_path / "accounts.txt").read_text(encoding="utf-8")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", Decimal("0")),
        ("  ", Decimal("0")),
        ("1500", Decimal("1500")),
        ("12,500.50", Decimal("12500.50")),
        ("fifteen", None),
        ("-1", None),
        ("NaN", None),
    ],
)
def test_parse_salary(raw: str, expected: Decimal | None) -> None:
    assert parse_salary(raw) == expected


def test_undecodable_account_line_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "accounts.txt").write_bytes(b"boss|admin|1234\ncashier|an\xffa|pw|100\n")
    book = AccountBook(tmp_path / "accounts.txt")

    book.load()

    assert [account.username for account in book.all()] == ["admin"]
    assert book.skipped_lines == 1
