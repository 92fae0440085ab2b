"""
Entry point for running xspec_harness as a module.

Usage:
    python -m xspec_harness [command] [options]
"""

from xspec_harness.cli import main

if __name__ == "__main__":
    main()
