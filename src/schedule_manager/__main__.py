"""Command-line entry point for running ``python -m schedule_manager``."""
from __future__ import annotations

import sys

from schedule_manager.cli import main

if __name__ == "__main__":
    sys.exit(main())
