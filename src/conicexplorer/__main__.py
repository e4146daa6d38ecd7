"""
Run with: python -m conicexplorer
"""
import sys

from conicexplorer.main import main

if __name__ == "__main__":
    sys.exit(main())
