#!/usr/bin/env python3
"""
Entry point script for running the Gust Watchdog directly.
"""

import sys

from gust_watchdog.main import main

if __name__ == "__main__":
    sys.exit(main())
