"""Allow ``python -m py_mlfq``."""

import sys

from py_mlfq.cli import main

sys.exit(main())
