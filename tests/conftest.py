"""Pytest configuration.

The repository uses a flat `src/` layout that is run without installing. This conftest makes the
`src.*` and `tests.*` namespaces importable when running `pytest` from a checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
