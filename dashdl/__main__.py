"""Allow running as ``python -m dashdl``."""

import sys

from dashdl.cli import main

sys.exit(main())
