"""
Entry point for running frame trigger as a module.

Usage:
    python -m frame_trigger [-c config.yaml]
"""

from .cli import main

if __name__ == "__main__":
    main()
