"""Allow running the agent with ``python -m todo_agent``."""

import sys

from .main import main

sys.exit(main())
