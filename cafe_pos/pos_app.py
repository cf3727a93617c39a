"""Main Textual app class."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from cafe_pos.accounts import parse_salary, role_permits
from cafe_pos.constant import KIOSK_OPERATOR, UNITS
from cafe_pos.context import CafeContext
from cafe_pos.menu import parse_price
from cafe_pos.modals import NumberModal, PromptModal, TextViewModal
from cafe_pos.models import Account
from cafe_pos.orders import OrderSession
from cafe_pos.recipes import parse_recipe_record
from cafe_pos.rendering import (
    availability_label,
    badge_style,
    format_cart_line,
    format_lines,
    format_menu_row,
    format_money,
    format_sale,
    recipe_text,
    stock_table,
)
from cafe_pos.reports import TimeFrame, build_sales_report, financial_snapshot, render_sales_report, save_sales_report

logger = logging.getLogger(__name__)

_LOGIN_FIELDS = [("Username", False), ("Password", True)]

# Terminal chosen from the role-select screen: key -> (terminal role, needs login).
_TERMINALS: dict[str, tuple[str, bool]] = {
    "1": ("boss", True),
    "2": ("cashier", True),
    "3": ("barista", True),
    "4": ("customer", False),
}

_TIMEFRAME_KEYS = {
    "d": TimeFrame.DAILY,
    "w": TimeFrame.WEEKLY,
    "m": TimeFrame.MONTHLY,
    "y": TimeFrame.YEARLY,
}


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _parse_amount(raw: str) -> Decimal | None:
    try:
        amount = Decimal(raw.strip().replace(",", ""))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class CafePosApp(App):
    """Counter terminal for ordering, stock control and reports."""

    TITLE = "Cafe POS"
    SUB_TITLE = "Counter / Stock Ledger"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #search-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    query = reactive("")
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "register_selected", "Add item"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, context: CafeContext) -> None:
        super().__init__()
        self.context = context
        self.unlocked = False
        self.terminal = ""
        self.account: Account | None = None
        self.session: OrderSession | None = None
        self.system_status = ""
        # Normal-mode key -> (permission, handler).
        self._key_actions: dict[str, tuple[str, Callable[[], None]]] = {
            "s": ("order", self._enter_search),
            "d": ("order", self._delete_selected_line),
            "j": ("order", lambda: self._move_cart_selection(1)),
            "k": ("order", lambda: self._move_cart_selection(-1)),
            "i": ("staff", self._show_stock),
            "v": ("cashier", self._show_availability),
            "!": ("cashier", self._prompt_issue),
            "e": ("barista", self._show_recipes),
            "p": ("barista", self._show_pending),
            "c": ("barista", self._prompt_complete_order),
            "f": ("boss", self._show_dashboard),
            "l": ("boss", self._clear_alerts),
            "a": ("boss", self._prompt_restock),
            "n": ("boss", self._prompt_new_ingredient),
            "x": ("boss", self._prompt_delete_ingredient),
            "m": ("boss", self._prompt_add_menu_item),
            "u": ("boss", self._prompt_update_price),
            "r": ("boss", self._prompt_remove_menu_item),
            "w": ("boss", self._prompt_sales_report),
            "g": ("boss", self._prompt_register_staff),
            "z": ("boss", self._prompt_remove_staff),
            "o": ("any", self._logout),
        }

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Current Order", classes="pane-title")
                yield Static("(no items yet)", id="cart-list")
            with Vertical(id="search-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        malformed = self.context.malformed_line_count()
        if malformed:
            self.system_status = f"Skipped {malformed} malformed data line(s); see log"
        self._refresh_all()
        self._prompt_unlock()

    # -- session lifecycle -------------------------------------------------

    def _prompt_unlock(self) -> None:
        self.push_screen(
            PromptModal("SYSTEM LOCKED: ADMIN UNLOCK REQUIRED", _LOGIN_FIELDS),
            self._on_unlock,
        )

    def _on_unlock(self, values: list[str] | None) -> None:
        if values is None:
            self.exit()
            return

        if self.context.accounts.authenticate(values[0], values[1], "boss") is None:
            self.system_status = "ACCESS DENIED. BOSS ONLY."
            self._refresh_search()
            self._prompt_unlock()
            return

        self.unlocked = True
        self.system_status = "ACCESS GRANTED. SYSTEM UNLOCKED."
        self._refresh_all()

    def _select_terminal(self, key: str) -> None:
        terminal, needs_login = _TERMINALS[key]
        if not needs_login:
            self._start_terminal(terminal, None)
            return

        def on_login(values: list[str] | None) -> None:
            if values is None:
                return
            account = self.context.accounts.authenticate(values[0], values[1], terminal)
            if account is None:
                self.system_status = "Invalid Credentials."
                self._refresh_search()
                return
            self._start_terminal(terminal, account)

        self.push_screen(PromptModal(f"{terminal.upper()} LOGIN", _LOGIN_FIELDS), on_login)

    def _start_terminal(self, terminal: str, account: Account | None) -> None:
        self.terminal = terminal
        self.account = account
        operator = account.username if account is not None else KIOSK_OPERATOR
        self.session = OrderSession(self.context, operator)
        self.cart_selected_index = None
        self.system_status = f"Signed in as {operator}"
        self.sub_title = f"{terminal.upper()} terminal"
        self._refresh_all()

    def _logout(self) -> None:
        self.terminal = ""
        self.account = None
        self.session = None
        self.input_state = "normal"
        self.system_status = "Logged out"
        self.sub_title = self.SUB_TITLE
        self._refresh_all()

    def _allowed(self, permission: str) -> bool:
        if permission == "any":
            return True
        if permission == "order":
            return self.terminal in {"boss", "cashier", "customer"}
        if self.account is None:
            return False
        if permission == "staff":
            return True
        return role_permits(self.account.role, permission)

    # -- key handling ------------------------------------------------------

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "active":
            if event.character.isalnum() or event.character == " ":
                self.query += event.character
                self.selected_index = 0
                self._refresh_search()
                event.stop()
            return

        if not self.unlocked:
            return

        key = event.character.lower()
        if not self.terminal:
            if key in _TERMINALS:
                self._select_terminal(key)
                event.stop()
            return

        entry = self._key_actions.get(key)
        if entry is None:
            return
        permission, handler = entry
        if not self._allowed(permission):
            self.system_status = "Access denied!"
            self._refresh_search()
        else:
            handler()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_register_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active" or self.session is None:
            return

        results = self._filtered_results()
        if not results:
            return

        name, _ = results[self.selected_index]
        if not self.context.inventory.is_available(name, self.context.recipes):
            self.system_status = f"OUT OF STOCK: {name}"
            self._refresh_search()
            return

        def on_quantity(quantity: int | None) -> None:
            if quantity is None or self.session is None:
                return
            outcome = self.session.add(name, quantity)
            self.system_status = outcome.message
            if outcome.added:
                self.cart_selected_index = len(self.session.lines) - 1
            self._refresh_all()

        self.push_screen(NumberModal("Quantity", f"How many {name}?"), on_quantity)

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active":
            return

        if not self.query:
            return
        self.query = self.query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_checkout(self) -> None:
        if isinstance(self.screen, ModalScreen) or self.session is None:
            return
        if self.input_state != "normal":
            self.system_status = "Checkout only outside search (Ctrl+C to exit search)"
            self._refresh_search()
            return
        if not self.session.lines:
            self.system_status = "Nothing to check out"
            self._refresh_search()
            return

        try:
            result = self.session.checkout()
        except OSError as exc:
            logger.exception("checkout_failed")
            self.system_status = f"Checkout failed: {exc} (unsold lines kept in cart)"
            self.cart_selected_index = None
            self._refresh_all()
            return

        body = Text(result.receipt or "No items could be made.")
        for line, shortage in result.rejected:
            reason = shortage.describe() if shortage is not None else "unavailable"
            body.append(f"\nSKIPPED {line.item_name} x{line.quantity}: {reason}", style="bold red")

        title = "ORDER SENT: PLEASE WAIT" if self.terminal == "customer" else "RECEIPT"
        self.system_status = f"Recorded {len(result.sales)} sale(s), {format_money(result.grand_total)}"
        self.cart_selected_index = None
        self._refresh_all()
        self.push_screen(TextViewModal(title, body))

    # -- order pane --------------------------------------------------------

    def _enter_search(self) -> None:
        self.input_state = "active"
        self.query = ""
        self.selected_index = 0
        self._refresh_search()

    def _filtered_results(self) -> list[tuple[str, Decimal]]:
        source = self.context.menu.items()
        if not self.query:
            return source
        q = self.query.lower()
        return [item for item in source if q in item[0].lower()]

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.session.lines if self.session is not None else []
        if not lines:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def _delete_selected_line(self) -> None:
        if self.session is None or self.cart_selected_index is None:
            return

        idx = self.cart_selected_index
        if not self.session.remove(idx):
            self.cart_selected_index = None
        elif not self.session.lines:
            self.cart_selected_index = None
        else:
            self.cart_selected_index = min(idx, len(self.session.lines) - 1)
        self._refresh_cart()

    # -- views -------------------------------------------------------------

    def _show_stock(self) -> None:
        self.push_screen(TextViewModal("INGREDIENT STOCKS", stock_table(self.context.inventory)))

    def _show_recipes(self) -> None:
        self.push_screen(TextViewModal("MENU RECIPES", recipe_text(self.context.recipes, self.context.inventory)))

    def _show_availability(self) -> None:
        text = Text()
        for name, _ in self.context.menu.items():
            text.append(f"{name:<24} : ")
            text.append_text(availability_label(self.context.inventory.is_available(name, self.context.recipes)))
            text.append("\n")
        self.push_screen(TextViewModal("AVAILABILITY CHECK", text))

    def _show_pending(self) -> None:
        pending = self.context.sales.pending()
        text = Text()
        for record in pending:
            text.append_text(format_sale(record))
            text.append("\n")
        if not pending:
            text.append("(No pending orders)", style="dim")
        self.push_screen(TextViewModal("PENDING ORDERS", text))

    def _show_dashboard(self) -> None:
        snapshot = financial_snapshot(self.context)
        text = Text()
        text.append(f"TOTAL REVENUE   {format_money(snapshot.revenue)}\n", style="green")
        text.append(f"EXPENSES        {format_money(snapshot.expenses)}\n", style="red")
        text.append(f"STAFF SALARY    {format_money(snapshot.staff_salary)}\n", style="yellow")
        text.append(
            f"NET PROFIT      {format_money(snapshot.net_profit)}\n\n",
            style="cyan" if snapshot.net_profit >= 0 else "bold red",
        )
        text.append("URGENT ALERTS\n", style="bold")
        text.append_text(format_lines(self.context.alerts.all(), empty="(no alerts)"))
        self.push_screen(TextViewModal("EXECUTIVE DASHBOARD", text))

    def _clear_alerts(self) -> None:
        self.context.alerts.clear()
        self._set_status("Alerts cleared.")

    # -- prompts -----------------------------------------------------------

    def _prompt(self, title: str, fields: list[tuple[str, bool]], on_done: Callable[[list[str]], None], hint: str = "") -> None:
        def callback(values: list[str] | None) -> None:
            if values is None:
                self._set_status("Cancelled.")
                return
            on_done(values)

        self.push_screen(PromptModal(title, fields, hint=hint), callback)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_all()

    def _prompt_issue(self) -> None:
        def done(values: list[str]) -> None:
            posted = self.context.alerts.post(values[0])
            self._set_status("Sent." if posted else "Issue text is required.")

        self._prompt("REPORT ISSUE", [("Issue", False)], done)

    def _prompt_complete_order(self) -> None:
        def done(sale_id: int | None) -> None:
            if sale_id is None:
                return
            completed = self.context.sales.mark_complete(sale_id)
            self._set_status("Completed!" if completed else "Order not found.")

        self.push_screen(NumberModal("COMPLETE ORDER", "Enter Sale ID", maximum=10**9 - 1, max_digits=9), done)

    def _prompt_restock(self) -> None:
        def done(values: list[str]) -> None:
            category, item, raw_qty, raw_cost = values
            qty = _parse_int(raw_qty)
            cost = _parse_amount(raw_cost)
            if qty is None or qty <= 0:
                self._set_status("Invalid Qty. Must be a positive number.")
                return
            if cost is None or cost < 0:
                self._set_status("Invalid Cost")
                return
            if self.context.inventory.restock(category, item, qty, cost):
                self._set_status("Stock Updated & Expense Recorded.")
            else:
                self._set_status("Item not found.")

        self._prompt(
            "RESTOCK EXISTING INGREDIENT",
            [("Category", False), ("Item", False), ("Qty to add", False), ("Cost (₱)", False)],
            done,
        )

    def _prompt_new_ingredient(self) -> None:
        def done(values: list[str]) -> None:
            category, name, unit, raw_qty = values
            unit = unit.lower()
            qty = _parse_int(raw_qty)
            if self.context.inventory.find(name) is not None:
                self._set_status(f"Ingredient '{name}' already exists. Use restock instead.")
            elif unit not in UNITS:
                self._set_status(f"Invalid unit. Choose one of: {' / '.join(UNITS)}")
            elif qty is None or qty <= 0:
                self._set_status("Invalid quantity. Must be a positive number.")
            elif self.context.inventory.add_or_update(category, name, qty, unit):
                self._set_status(f"Ingredient '{name}' added under '{category}' with {qty:,} {unit}.")
            else:
                self._set_status("Category and name are required.")

        self._prompt(
            "ADD NEW INGREDIENT",
            [("Category", False), ("Ingredient name", False), ("Unit", False), ("Starting quantity", False)],
            done,
            hint=f"Units: {' / '.join(UNITS)}",
        )

    def _prompt_delete_ingredient(self) -> None:
        def done(values: list[str]) -> None:
            category, name, confirm = values
            if confirm.lower() != "y":
                self._set_status("Cancelled.")
            elif self.context.inventory.delete(category, name):
                self._set_status("Deleted.")
            else:
                self._set_status("Ingredient not found.")

        self._prompt("DELETE INGREDIENT", [("Category", False), ("Ingredient", False), ("Sure? (y/n)", False)], done)

    def _prompt_add_menu_item(self) -> None:
        def done(values: list[str]) -> None:
            name, raw_price, raw_recipe = values
            price = parse_price(raw_price)
            if price is None:
                self._set_status("Invalid price. Must be a positive number.")
                return
            if name in self.context.menu:
                self._set_status(f"Item '{name}' already exists in the menu.")
                return

            recipe: dict[str, int] = {}
            if raw_recipe:
                parsed = parse_recipe_record(f"{name}|{raw_recipe}")
                recipe = parsed[1] if parsed is not None else {}
                missing = [ing for ing in recipe if self.context.inventory.find(ing) is None]
                if parsed is None or not recipe or missing:
                    self._set_status(f"Recipe rejected; unknown or malformed: {', '.join(missing) or raw_recipe}")
                    return

            if not self.context.menu.add(name, price):
                self._set_status("Name is required.")
                return
            if recipe:
                self.context.recipes.set(name, recipe)
            self._set_status(f"Item '{name}' added to menu.")

        self._prompt(
            "ADD MENU ITEM",
            [("Name", False), ("Price", False), ("Recipe (optional)", False)],
            done,
            hint="Recipe format: Coffee Beans=15;Cups=1",
        )

    def _prompt_update_price(self) -> None:
        def done(values: list[str]) -> None:
            name, raw_price = values
            price = parse_price(raw_price)
            if price is None:
                self._set_status("Invalid price. Must be a positive number.")
            elif self.context.menu.set_price(name, price):
                self._set_status(f"Price of '{name}' is now {format_money(price)}.")
            else:
                self._set_status("Item not found.")

        self._prompt("UPDATE PRICE", [("Name", False), ("New price", False)], done)

    def _prompt_remove_menu_item(self) -> None:
        def done(values: list[str]) -> None:
            name = values[0]
            if self.context.remove_menu_item(name):
                self._set_status(f"Item and recipe for '{name}' deleted.")
            else:
                self._set_status("Item not found.")

        self._prompt("REMOVE MENU ITEM", [("Name", False)], done)

    def _prompt_sales_report(self) -> None:
        def done(values: list[str]) -> None:
            timeframe = _TIMEFRAME_KEYS.get(values[0][:1].lower())
            if timeframe is None:
                self._set_status("Invalid option...")
                return
            report = build_sales_report(self.context.sales.records(), timeframe)
            if not report.rows:
                self._set_status("No sales found for the selected period.")
                return
            path = save_sales_report(report, self.context.data_dir)
            self._set_status(f"Report saved to: {path}")
            self.push_screen(TextViewModal("SALES REPORT", Text(render_sales_report(report))))

        self._prompt("SALES REPORT", [("Period (d/w/m/y)", False)], done, hint="daily / weekly / monthly / yearly")

    def _prompt_register_staff(self) -> None:
        def done(values: list[str]) -> None:
            role, username, password, raw_salary = values
            salary = parse_salary(raw_salary)
            if salary is None:
                self._set_status(f"Registration refused: invalid salary '{raw_salary}'.")
                return
            account = self.context.accounts.register(role, username, password, salary)
            if account is None:
                self._set_status("Registration refused: check role, username and salary.")
            else:
                self._set_status(f"Account Created! Salary for {account.username}: {format_money(account.salary)}")

        self._prompt(
            "NEW ACCOUNT REGISTRATION",
            [("Role", False), ("Username", False), ("Password", True), ("Salary", False)],
            done,
            hint="Roles: boss / owner / cashier / barista / staff",
        )

    def _prompt_remove_staff(self) -> None:
        staff = self.context.accounts.staff()
        if not staff:
            self._set_status("No staff found to remove.")
            return
        listing = "\n".join(f"{acc.username} ({acc.role}) - Salary: {format_money(acc.salary)}" for acc in staff)

        def done(values: list[str]) -> None:
            if self.context.accounts.remove_staff(values[0]):
                self._set_status(f"Staff '{values[0]}' removed successfully!")
            else:
                self._set_status("Invalid selection.")

        self._prompt("REMOVE STAFF", [("Username", False)], done, hint=listing)

    # -- refresh -----------------------------------------------------------

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_search()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
        except NoMatches:
            return
        lines = self.session.lines if self.session is not None else []
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(no items yet)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        visible_rows = max(1, self._visible_rows(cart_widget) - 1)
        start, end = self._window_bounds(len(lines), visible_rows, self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append(f"{idx + 1}. ")
            text.append_text(format_cart_line(lines[idx]))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        subtotal = sum((line.total for line in lines), Decimal("0"))
        text.append(f"\n\nSUBTOTAL: {format_money(subtotal)}", style="bold cyan")
        cart_widget.update(text)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _help_line(self) -> str:
        if not self.unlocked:
            return "System locked."
        if not self.terminal:
            return "Select role: 1 Boss  2 Cashier  3 Barista  4 Self-Order"
        if self.terminal == "customer":
            return "S search menu. J/K select, D remove. Ctrl+S place order. O exit."
        if self.terminal == "barista":
            return "P pending, C complete order, E recipes, I stock. O logout."
        if self.terminal == "cashier":
            return "S search. Ctrl+S checkout. V availability, I stock, ! report issue. O logout."
        return "S order  F dashboard  A/N/X stock  M/U/R menu  W report  G/Z staff  L clear alerts  O logout"

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            text = Text()
            if self.terminal:
                text.append(f" {self.terminal.upper()} ", style=badge_style(self.terminal))
                text.append(" ")
            text.append(self._help_line())
            text.append(f"\n{self.system_status or 'Ready'}")
            bar.update(text)
            return

        text = Text()
        text.append("MENU", style=badge_style(self.terminal or "cashier"))
        text.append(f": {self.query}")
        bar.update(text)

    def _refresh_results(self, results: list[tuple[str, Decimal]]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            name, price = results[idx]
            pointer = "➤ " if idx == self.selected_index else "  "
            text.append(pointer)
            available = self.context.inventory.is_available(name, self.context.recipes)
            text.append_text(format_menu_row(name, price, available))

        if end < len(results):
            text.append("\n⋮", style="dim")

        results_widget.update(text)
