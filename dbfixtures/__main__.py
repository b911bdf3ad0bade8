"""
dbfixtures - command line entry point.
"""

import sys

from dbfixtures.cli import main

if __name__ == "__main__":
    sys.exit(main())
