"""Allow `python -m clmm_probe`."""

import sys

from clmm_probe.cli import main

sys.exit(main())
