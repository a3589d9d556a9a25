#!/usr/bin/env python3
"""
Parse a saved bet history page and print one JSON object per wager.

Usage:
  python scripts/replay_bet_history.py --file logs/raw_html/draftkings_YYYYMMDD_HHMMSS.html
  python scripts/replay_bet_history.py --book DraftKings                # uses most recent file automatically
  python scripts/replay_bet_history.py --file page.html --log-level DEBUG

Wagers go to stdout, logs to stderr. Diagnostic only: nothing is stored.
"""
from __future__ import annotations

import argparse
import glob
import json
import os
import sys
import time
from typing import Optional

# Make 'src' importable when called directly
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from bethistory.config.settings import get_settings  # type: ignore
from bethistory.pipeline.html_pipeline import BetHistoryError, parse_document  # type: ignore
from bethistory.utils.logger import setup_logger  # type: ignore


def find_latest_snapshot(book: str) -> Optional[str]:
    pattern = os.path.join(PROJECT_ROOT, "logs", "raw_html", f"{book.lower()}_*.html")
    files = sorted(glob.glob(pattern))
    return files[-1] if files else None


def load_html(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Replay a saved bet history page")
    parser.add_argument("--file", help="path to HTML snapshot; if omitted, use latest")
    parser.add_argument("--book", default=settings.ingest.default_book, help="sportsbook family: DraftKings or FanDuel")
    parser.add_argument("--log-level", default=settings.ingest.log_level, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--console-logs", action="store_true", help="human-readable logs instead of JSON lines")
    args = parser.parse_args()

    logger = setup_logger(
        args.log_level,
        settings.ingest.log_file,
        service_name="replay_bet_history",
        json_output=not args.console_logs,
    )

    path = args.file or find_latest_snapshot(args.book)
    if not path or not os.path.exists(path):
        logger.error("HTML snapshot not found", path=path)
        return 3

    html = load_html(path)
    t0 = time.perf_counter()
    try:
        wagers = parse_document(html, book=args.book, logger=logger)
    except BetHistoryError as e:
        logger.error("Replay failed", path=path, error=str(e))
        return 2
    t_parse = (time.perf_counter() - t0) * 1000

    for wager in wagers:
        print(json.dumps(wager.to_dict(), ensure_ascii=False))

    logger.info("Replay summary", path=path, book=args.book, parsed=len(wagers), parse_ms=f"{t_parse:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
