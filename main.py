#!/usr/bin/env python3
"""MyTrainer — entry point.

Run with:
    python main.py
    python -m mytrainer
"""

from mytrainer.__main__ import main


if __name__ == "__main__":
    main()
