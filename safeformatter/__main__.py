"""Allow ``python -m safeformatter``."""

import sys

from safeformatter.cli import main


if __name__ == "__main__":
    sys.exit(main())
