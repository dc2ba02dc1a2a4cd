"""
Main entry point for running the server opportunity cost model.

Usage:
    python -m server_opportunity_model configs/default.json
    python -m server_opportunity_model configs/default.json --phone-time 20 --plot
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
