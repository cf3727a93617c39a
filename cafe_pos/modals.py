"""Modal screens: text prompts, number entry and read-only views."""

from __future__ import annotations

from rich.console import RenderableType
from textual.app import ComposeResult
from textual.containers import Container, VerticalScroll
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

_DIALOG_CSS = """
    #dialog {
        width: 64;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #dialog-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #dialog-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #dialog-help {
        color: #dddddd;
    }
"""


class PromptModal(ModalScreen[list[str] | None]):
    """Collect one or more free-text fields; secret fields are masked."""

    CSS = (
        """
    PromptModal {
        align: center middle;
        background: $background 60%;
    }

    .prompt-field {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
    }

    .prompt-field.-current {
        border: heavy $accent;
    }
    """
        + _DIALOG_CSS
    )

    def __init__(self, title: str, fields: list[tuple[str, bool]], hint: str = "") -> None:
        super().__init__()
        self.title_text = title
        self.fields = fields
        self.hint = hint
        self.values = ["" for _ in fields]
        self.current = 0

    def compose(self) -> ComposeResult:
        with Container(id="dialog"):
            yield Static(self.title_text, id="dialog-title")
            if self.hint:
                yield Static(self.hint)
            for idx, (label, _) in enumerate(self.fields):
                yield Static(label)
                yield Static(id=f"field-{idx}", classes="prompt-field")
            yield Static("Enter next/confirm. Backspace delete. Esc/Ctrl+C cancel.", id="dialog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key in {"enter", "tab"}:
            if self.current < len(self.fields) - 1:
                self.current += 1
                self._refresh_content()
            elif event.key == "enter":
                self.dismiss([value.strip() for value in self.values])
            event.stop()
            return

        if event.key == "shift+tab":
            self.current = max(0, self.current - 1)
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            value = self.values[self.current]
            if value:
                self.values[self.current] = value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.values[self.current] += event.character
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        for idx, (_, secret) in enumerate(self.fields):
            widget = self.query_one(f"#field-{idx}", Static)
            value = self.values[idx]
            widget.update("*" * len(value) if secret else value)
            widget.set_class(idx == self.current, "-current")


class NumberModal(ModalScreen[int | None]):
    """Prompt for a bounded positive integer (quantity, sale id)."""

    CSS = (
        """
    NumberModal {
        align: center middle;
        background: $background 60%;
    }

    #number-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }
    """
        + _DIALOG_CSS
    )

    def __init__(self, title: str, prompt: str, maximum: int = 999, max_digits: int = 3) -> None:
        super().__init__()
        self.title_text = title
        self.prompt = prompt
        self.maximum = maximum
        self.max_digits = max_digits
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="dialog"):
            yield Static(self.title_text, id="dialog-title")
            yield Static(self.prompt)
            yield Static(id="number-value")
            yield Static(id="dialog-error")
            yield Static("Digits only. Enter confirm. Backspace delete. Esc/q/Ctrl+C cancel.", id="dialog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            if len(self.value) < self.max_digits:
                self.value += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _confirm(self) -> None:
        if not self.value:
            self.error = "A number is required."
            self._refresh_content()
            return

        parsed = int(self.value)
        if not (1 <= parsed <= self.maximum):
            self.error = f"Must be between 1 and {self.maximum}."
            self._refresh_content()
            return

        self.dismiss(parsed)

    def _refresh_content(self) -> None:
        self.query_one("#number-value", Static).update(self.value or "")
        self.query_one("#dialog-error", Static).update(self.error or "")


class TextViewModal(ModalScreen[None]):
    """Scrollable read-only view for receipts, stock, reports and order queues."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = (
        """
    TextViewModal {
        align: center middle;
        background: $background 60%;
    }

    TextViewModal #dialog {
        width: 90;
    }

    #view-body {
        height: auto;
        max-height: 30;
    }
    """
        + _DIALOG_CSS
    )

    def __init__(self, title: str, body: RenderableType) -> None:
        super().__init__()
        self.title_text = title
        self.body = body

    def compose(self) -> ComposeResult:
        with Container(id="dialog"):
            yield Static(self.title_text, id="dialog-title")
            with VerticalScroll(id="view-body"):
                yield Static(self.body)
            yield Static("Esc / q / Ctrl+C to close", id="dialog-help")

    def action_close(self) -> None:
        self.dismiss()
