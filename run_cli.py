#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
i18n-check Launcher
===================

Runs the command line analyzer from a source checkout, without installing
the package:

    python run_cli.py src/ --output report.tsv
"""

import sys
from pathlib import Path


def configure_streams() -> None:
    """Reports contain source text in any script; never fail on printing it."""
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def add_checkout_to_path() -> None:
    checkout = Path(__file__).resolve().parent
    if str(checkout) not in sys.path:
        sys.path.insert(0, str(checkout))


def main() -> int:
    configure_streams()
    add_checkout_to_path()

    try:
        from i18n_check.cli_main import main as cli_main
    except ImportError as e:
        print(f"Error: Could not import i18n_check ({e}).")
        print("Install the dependencies with: pip install -e .")
        return 1
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
