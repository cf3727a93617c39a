"""Entry point for the cafe-pos Textual app."""

from __future__ import annotations

import logging

from cafe_pos.config import DATA_DIR, LOG_LEVEL, LOG_PATH
from cafe_pos.context import CafeContext
from cafe_pos.pos_app import CafePosApp


def configure_logging() -> None:
    """Send log records to a file; the terminal belongs to the app."""
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=LOG_PATH,
        encoding="utf-8",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main() -> None:
    """Load the stores and run the Textual application."""
    configure_logging()
    context = CafeContext.open(DATA_DIR)
    logging.getLogger(__name__).info("app_start data_dir=%s next_sale_id=%d", DATA_DIR, context.sales.next_id)
    CafePosApp(context).run()


if __name__ == "__main__":
    main()
