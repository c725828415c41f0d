"""Pytest conftest: path setup so tests can import the top-level modules and helpers."""

import sys
from pathlib import Path

# Repo root: chart_state, skill_dataset, templeosrs_fetch, utils/, tui/
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Add tests/ to sys.path so `from helpers import ...` works
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))
