#!/usr/bin/env python3
"""Timer Time: entry point.

Run with:
    python main.py
    python -m timertime
"""

from timertime.__main__ import main


if __name__ == "__main__":
    main()
