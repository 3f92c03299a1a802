"""Entry point for ``python -m demo_setup``."""

import sys

from demo_setup.cli import main

sys.exit(main())
