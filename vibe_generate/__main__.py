"""Allow ``python -m vibe_generate``."""

import sys

from vibe_generate.cli import main

sys.exit(main())
