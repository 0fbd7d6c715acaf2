from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

if BACKEND_DIR.exists():
    backend_path = str(BACKEND_DIR)
    if backend_path not in sys.path:
        sys.path.insert(0, backend_path)


def _isolate_importer_env() -> None:
    # settings are read at import time; keep the developer's overrides out of test runs
    for key in list(os.environ):
        if key.upper().startswith("PYX_IMPORTER_"):
            os.environ.pop(key)


_isolate_importer_env()
