"""Allow `python -m sutrakit`."""

import sys

from sutrakit.cli import main

if __name__ == '__main__':
    sys.exit(main())
