#!/usr/bin/env python3
"""
Run the crawler from a source checkout: ``python crawl.py https://example.com``.
"""
from pathlib import Path
import sys

if __package__ in {None, ""}:
    src_root = Path(__file__).resolve().parent / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))

from sitemapper.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
