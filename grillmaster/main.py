"""Entry point for the grillmaster-pos Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from grillmaster.config import DB_PATH, LOG_LEVEL, LOG_PATH
from grillmaster.persistence import load_state
from grillmaster.pos_app import PosApp
from grillmaster.storage import KeyValueStorage
from grillmaster.store import Store

logger = logging.getLogger("grillmaster")


def configure_logging(log_path: str = LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Send package logs to a file so they never draw over the terminal UI."""
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))


def build_store(storage: KeyValueStorage) -> Store:
    storage.bootstrap_schema()
    return Store(load_state(storage))


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    storage = KeyValueStorage(DB_PATH)
    store = build_store(storage)
    logger.info("starting with database %s", storage.db_path)
    PosApp(store, storage).run()


if __name__ == "__main__":
    main()
