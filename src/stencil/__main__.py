"""Allow ``python -m stencil``."""
import sys

from stencil.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
