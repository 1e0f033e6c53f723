"""Allow `python -m storyfacts`."""

import sys

from storyfacts.cli import main

if __name__ == "__main__":
    sys.exit(main())
