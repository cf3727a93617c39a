"""Issue reports left by staff for the boss dashboard."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from cafe_pos.persistence import append_line, read_lines, write_lines

logger = logging.getLogger(__name__)


class AlertBoard:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def post(self, message: str, when: datetime | None = None, source: str = "CASHIER") -> bool:
        message = " ".join(message.split())
        if not message:
            return False
        stamp = (when or datetime.now()).strftime("%m/%d/%Y %I:%M:%S %p")
        append_line(self.path, f"[{source.upper()} ALERT] {stamp}: {message}")
        logger.info("alert_posted source=%s", source)
        return True

    def all(self) -> list[str]:
        return [line for line in read_lines(self.path) if line.strip()]

    def clear(self) -> None:
        write_lines(self.path, [])
        logger.info("alerts_cleared")
