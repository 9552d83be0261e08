"""
Allow running tolerant_intervals as a module:

    python3 -m tolerant_intervals <op> LOW HIGH [LOW HIGH] [options]

Delegates to tolerant_intervals.cli:main().
"""
import sys
from .cli import main

sys.exit(main())
