from __future__ import annotations

import os

# Keep console logging quiet while tests run.
os.environ.setdefault("RSQL_DISABLE_CONSOLE", "1")
