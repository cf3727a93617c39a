"""Rendering helpers for the terminal views."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from rich.table import Table
from rich.text import Text

from cafe_pos.config import LOW_STOCK_THRESHOLD
from cafe_pos.constant import ADMIN_ROLES, CURRENCY
from cafe_pos.inventory import IngredientStore, Recipes
from cafe_pos.models import CartLine, SaleRecord, SaleStatus


def format_money(amount: Decimal) -> str:
    return f"{CURRENCY}{amount:,.2f}"


def badge_style(role: str) -> str:
    """Return a consistent badge style for the signed-in role."""
    role = role.lower()
    if role in ADMIN_ROLES:
        return "bold #ffffff on #b23a48"
    if role == "barista":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def availability_label(available: bool) -> Text:
    if available:
        return Text("AVAILABLE", style="bold green")
    return Text("OUT OF STOCK", style="bold red")


def format_menu_row(name: str, price: Decimal, available: bool) -> Text:
    text = Text()
    text.append(f"{name:<24} {format_money(price):>10}  ")
    text.append_text(availability_label(available))
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(f"{line.item_name:<22} x{line.quantity:<3} ")
    text.append(format_money(line.total), style="bold")
    return text


def format_sale(record: SaleRecord) -> Text:
    style = "yellow" if record.status is SaleStatus.PENDING else "green"
    text = Text()
    text.append(f"#{record.sale_id} ", style="bold")
    text.append(f"{record.timestamp:%I:%M %p}  {record.item_name} x{record.quantity}  ")
    text.append(f"[{record.status.value}]", style=style)
    text.append(f"  by {record.operator}", style="dim")
    return text


def is_low_stock(qty: int) -> bool:
    return qty < LOW_STOCK_THRESHOLD


def stock_table(inventory: IngredientStore) -> Table:
    """Ingredients grouped by category; low stock in red."""
    table = Table(expand=True)
    table.add_column("Category", style="cyan")
    table.add_column("Item")
    table.add_column("Qty", justify="right")
    table.add_column("Unit")

    for category, items in inventory.categories():
        for name, info in items.items():
            style = "bold red" if is_low_stock(info.qty) else ""
            table.add_row(category, name, Text(f"{info.qty:,}", style=style), info.unit)
    return table


def recipe_text(recipes: Recipes, inventory: IngredientStore) -> Text:
    text = Text()
    for name, recipe in recipes.items():
        text.append(f"[{name}]\n", style="bold yellow")
        if not recipe:
            text.append("  (no recipe)\n", style="dim")
        for ingredient, amount in recipe.items():
            text.append(f"  - {ingredient}: {amount} {inventory.unit_of(ingredient)}\n")
    return text


def format_lines(lines: Iterable[str], empty: str = "(none)") -> Text:
    lines = list(lines)
    if not lines:
        return Text(empty, style="dim")
    return Text("\n".join(lines))
