"""Run the linegetter command line: python -m linegetter FILE [LINE ...]"""

import sys

from linegetter.cli import main

sys.exit(main())
