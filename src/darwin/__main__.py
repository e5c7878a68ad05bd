"""Allow ``python -m darwin``."""

import sys

from darwin.cli import main

sys.exit(main())
