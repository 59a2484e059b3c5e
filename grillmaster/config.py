"""Runtime configuration defaults for persistence, logging and checkout."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("GRILLMASTER_DB_PATH", "data/grillmaster.db")

LOG_PATH = os.environ.get("GRILLMASTER_LOG_PATH", "/tmp/grillmaster-pos.log")
LOG_LEVEL = os.environ.get("GRILLMASTER_LOG_LEVEL", "INFO").upper()

# Quiet period before a burst of state changes is written out.
AUTOSAVE_DELAY_SECONDS = 0.1

# Cart starts empty on reload unless this is switched on.
PERSIST_CART = False

MAX_HISTORY = 5

DEFAULT_TAX_RATE = 15.0

CURRENCY_CODE = "LKR"
CURRENCY_SYMBOL = "Rs."
