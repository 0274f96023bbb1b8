"""Rebuild the daily attendance reports of every class (manual trigger).

Usage: python scripts/reconcile_reports.py [CLASS_ID ...]
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "classroom_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from classroom_attendance.container import build_container
from classroom_attendance.main import load_settings


def main(argv: list[str]) -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    container = build_container(settings=load_settings())
    summary = container.reconciliation_engine.run(argv or None)
    print(f"Reports saved: {summary.succeeded} succeeded, {summary.failed} failed")
    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
