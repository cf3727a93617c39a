"""Owned store instances, built once at startup and passed to every consumer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cafe_pos import config
from cafe_pos.accounts import AccountBook
from cafe_pos.alerts import AlertBoard
from cafe_pos.expenses import ExpenseLog
from cafe_pos.inventory import IngredientStore
from cafe_pos.menu import MenuCatalog
from cafe_pos.persistence import ensure_file
from cafe_pos.recipes import RecipeCatalog
from cafe_pos.sales import SaleLedger


@dataclass
class CafeContext:
    data_dir: Path
    inventory: IngredientStore
    recipes: RecipeCatalog
    menu: MenuCatalog
    sales: SaleLedger
    expenses: ExpenseLog
    alerts: AlertBoard
    accounts: AccountBook

    @property
    def receipts_path(self) -> Path:
        return self.data_dir / config.RECEIPTS_FILE

    @classmethod
    def open(cls, data_dir: Path | None = None) -> CafeContext:
        """Create missing files, load every store and recover the next sale id."""
        data_dir = Path(data_dir or config.DATA_DIR)
        for name in (config.SALES_FILE, config.EXPENSES_FILE, config.ALERTS_FILE):
            ensure_file(data_dir / name)

        expenses = ExpenseLog(data_dir / config.EXPENSES_FILE)
        context = cls(
            data_dir=data_dir,
            inventory=IngredientStore(data_dir / config.INVENTORY_FILE, expenses=expenses),
            recipes=RecipeCatalog(data_dir / config.RECIPES_FILE),
            menu=MenuCatalog(data_dir / config.MENU_FILE),
            sales=SaleLedger(data_dir / config.SALES_FILE),
            expenses=expenses,
            alerts=AlertBoard(data_dir / config.ALERTS_FILE),
            accounts=AccountBook(data_dir / config.ACCOUNTS_FILE),
        )
        context.accounts.load()
        context.menu.load()
        context.recipes.load()
        context.inventory.load()
        return context

    def remove_menu_item(self, name: str) -> bool:
        """Drop a menu item together with its recipe."""
        if not self.menu.remove(name):
            return False
        self.recipes.remove(name)
        return True

    def malformed_line_count(self) -> int:
        return (
            self.inventory.skipped_lines
            + self.recipes.skipped_lines
            + self.menu.skipped_lines
            + self.accounts.skipped_lines
        )
