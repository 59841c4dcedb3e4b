"""Allow ``python -m exprparse``."""

import sys

from exprparse.cli import main

sys.exit(main())
