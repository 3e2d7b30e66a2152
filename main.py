#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

Tile a single photo:

    python main.py single my_photo.jpg

Or drop images into ``images/`` and run the whole folder:

    python main.py batch
    python -m sprinkle.cli batch --help
"""

from sprinkle.cli import app

if __name__ == "__main__":
    app()
