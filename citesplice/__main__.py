"""Allow running citesplice with ``python -m citesplice``."""
import sys

from .cli import main

sys.exit(main())
