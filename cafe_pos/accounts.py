"""Staff accounts and the role check shared by every login prompt."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from cafe_pos.constant import ADMIN_ROLES, DEFAULT_ACCOUNT_LINE, FIELD_SEP, KNOWN_ROLES, STAFF_ROLES
from cafe_pos.models import Account
from cafe_pos.persistence import append_line, is_missing_or_empty, is_unreadable, read_lines, write_lines

logger = logging.getLogger(__name__)


def role_permits(role: str, required_role: str) -> bool:
    """A role passes when it matches exactly or is boss/owner."""
    role = role.strip().lower()
    return role == required_role.strip().lower() or role in ADMIN_ROLES


def parse_salary(raw: str) -> Decimal | None:
    """Salary as typed at registration: blank means 0, anything unreadable or negative is None."""
    raw = raw.strip().replace(",", "")
    if not raw:
        return Decimal("0")
    try:
        salary = Decimal(raw)
    except InvalidOperation:
        return None
    if not salary.is_finite() or salary < 0:
        return None
    return salary


def parse_account_record(line: str) -> Account | None:
    parts = [part.strip() for part in line.split(FIELD_SEP)]
    if len(parts) < 3 or not parts[1]:
        return None

    salary = Decimal("0")
    if len(parts) >= 4:
        try:
            salary = Decimal(parts[3])
        except InvalidOperation:
            salary = Decimal("0")
    return Account(role=parts[0], username=parts[1], password=parts[2], salary=salary)


class AccountBook:
    """Accounts keyed by username."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.skipped_lines = 0
        self._accounts: dict[str, Account] = {}

    def load(self) -> None:
        self._accounts = {}
        self.skipped_lines = 0

        if is_missing_or_empty(self.path):
            write_lines(self.path, [DEFAULT_ACCOUNT_LINE])
            logger.info("accounts_seeded path=%s", self.path)

        for line in read_lines(self.path):
            if not line.strip():
                continue
            account = None if is_unreadable(line) else parse_account_record(line)
            if account is None:
                self.skipped_lines += 1
                continue
            self._accounts[account.username] = account

        if self.skipped_lines:
            logger.warning("accounts_malformed_lines path=%s skipped=%d", self.path, self.skipped_lines)

    def save(self) -> None:
        write_lines(self.path, (account.to_record() for account in self._accounts.values()))

    def get(self, username: str) -> Account | None:
        return self._accounts.get(username.strip())

    def all(self) -> list[Account]:
        return list(self._accounts.values())

    def staff(self) -> list[Account]:
        return [account for account in self._accounts.values() if not account.is_admin]

    def authenticate(self, username: str, password: str, required_role: str) -> Account | None:
        account = self.get(username)
        if account is None or account.password != password.strip():
            logger.info("login_failed username=%r role=%s", username, required_role)
            return None
        if not role_permits(account.role, required_role):
            logger.info("login_denied username=%r role=%s", username, required_role)
            return None
        logger.info("login_ok username=%r role=%s", account.username, required_role)
        return account

    def register(self, role: str, username: str, password: str, salary: Decimal = Decimal("0")) -> Account | None:
        role = role.strip().lower()
        username = username.strip()
        if role not in KNOWN_ROLES or not username or FIELD_SEP in username or username in self._accounts:
            return None
        if not password or FIELD_SEP in password or salary < 0:
            return None

        account = Account(role=role, username=username, password=password, salary=salary)
        if account.is_admin:
            account.salary = Decimal("0")
        self._accounts[username] = account
        append_line(self.path, account.to_record())
        logger.info("account_registered username=%r role=%s", username, role)
        return account

    def remove_staff(self, username: str) -> bool:
        account = self.get(username)
        if account is None or account.is_admin:
            return False

        del self._accounts[account.username]
        self.save()
        logger.info("account_removed username=%r", account.username)
        return True

    def total_staff_salary(self) -> Decimal:
        return sum(
            (account.salary for account in self._accounts.values() if account.role.lower() in STAFF_ROLES),
            Decimal("0"),
        )
