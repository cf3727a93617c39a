"""Editable seed catalogs and fixed vocabulary."""

from __future__ import annotations

CURRENCY = "₱"
FIELD_SEP = "|"
DEFAULT_UNIT = "pieces"

UNITS: tuple[str, ...] = ("grams", "ml", "pieces")

ADMIN_ROLES: frozenset[str] = frozenset({"boss", "owner"})
STAFF_ROLES: frozenset[str] = frozenset({"cashier", "barista", "staff"})
KNOWN_ROLES: frozenset[str] = ADMIN_ROLES | STAFF_ROLES

KIOSK_OPERATOR = "Kiosk-Customer"

DEFAULT_ACCOUNT_LINE = "boss|admin|1234"

DEFAULT_INGREDIENTS: dict[str, dict[str, tuple[int, str]]] = {
    "Raw Materials": {
        "Coffee Beans": (1000, "grams"),
        "Matcha Powder": (1000, "grams"),
        "Cocoa Powder": (1000, "grams"),
        "Sugar": (5000, "grams"),
    },
    "Dairy": {
        "Milk": (5000, "ml"),
    },
    "Packaging": {
        "Cups": (500, "pieces"),
        "Lids": (500, "pieces"),
        "Straws": (500, "pieces"),
    },
}

DEFAULT_MENU: dict[str, str] = {
    "Hot Coffee": "90",
    "Iced Coffee": "100",
    "Cafe Latte": "120",
    "Iced Latte": "130",
    "Brown Sugar Latte": "140",
    "Sweetened Milk Coffee": "110",
    "Hot Matcha Latte": "130",
    "Iced Matcha Latte": "140",
    "Matcha Milk": "120",
    "Hot Chocolate": "110",
    "Iced Chocolate": "120",
    "Chocolate Milk": "100",
}

DEFAULT_RECIPES: dict[str, dict[str, int]] = {
    "Hot Coffee": {"Coffee Beans": 15, "Cups": 1, "Lids": 1},
    "Iced Coffee": {"Coffee Beans": 15, "Sugar": 10, "Cups": 1, "Lids": 1, "Straws": 1},
    "Cafe Latte": {"Coffee Beans": 20, "Milk": 150, "Cups": 1, "Lids": 1},
    "Iced Latte": {"Coffee Beans": 20, "Milk": 120, "Sugar": 10, "Cups": 1, "Lids": 1, "Straws": 1},
    "Brown Sugar Latte": {"Coffee Beans": 20, "Milk": 150, "Sugar": 25, "Cups": 1, "Lids": 1, "Straws": 1},
    "Sweetened Milk Coffee": {"Coffee Beans": 15, "Milk": 50, "Sugar": 15, "Cups": 1, "Lids": 1},
    "Hot Matcha Latte": {"Matcha Powder": 15, "Milk": 200, "Sugar": 10, "Cups": 1, "Lids": 1},
    "Iced Matcha Latte": {"Matcha Powder": 15, "Milk": 150, "Sugar": 15, "Cups": 1, "Lids": 1, "Straws": 1},
    "Matcha Milk": {"Matcha Powder": 10, "Milk": 250, "Cups": 1, "Lids": 1, "Straws": 1},
    "Hot Chocolate": {"Cocoa Powder": 30, "Milk": 200, "Sugar": 15, "Cups": 1, "Lids": 1},
    "Iced Chocolate": {"Cocoa Powder": 30, "Milk": 150, "Sugar": 15, "Cups": 1, "Lids": 1, "Straws": 1},
    "Chocolate Milk": {"Cocoa Powder": 15, "Milk": 250, "Sugar": 10, "Cups": 1, "Lids": 1, "Straws": 1},
}
