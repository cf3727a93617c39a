"""Runtime configuration defaults for the flat-file stores and logging."""

from __future__ import annotations

import os
from pathlib import Path

_DATA_DIR_ENV = "CAFE_POS_DATA_DIR"
_LOG_PATH_ENV = "CAFE_POS_LOG_PATH"
_LOG_LEVEL_ENV = "CAFE_POS_LOG_LEVEL"

DATA_DIR = Path(os.environ.get(_DATA_DIR_ENV, "").strip() or "data")

INVENTORY_FILE = "inventory.txt"
RECIPES_FILE = "recipes.txt"
MENU_FILE = "menu.txt"
ACCOUNTS_FILE = "accounts.txt"
SALES_FILE = "sales.txt"
EXPENSES_FILE = "expenses.txt"
ALERTS_FILE = "reports.txt"
RECEIPTS_FILE = "all_receipts.txt"

LOG_PATH = Path(os.environ.get(_LOG_PATH_ENV, "").strip() or DATA_DIR / "cafe-pos.log")
LOG_LEVEL = os.environ.get(_LOG_LEVEL_ENV, "").strip().upper() or "INFO"

# Stock below this is highlighted in stock views.
LOW_STOCK_THRESHOLD = 50
