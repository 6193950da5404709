"""Allow ``python -m implgen``."""

import sys

from .cli import main

sys.exit(main())
