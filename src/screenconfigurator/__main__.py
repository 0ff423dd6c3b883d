"""
Run with: python -m screenconfigurator
"""
import sys

from screenconfigurator.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
