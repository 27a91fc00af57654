#!/usr/bin/env python3
"""Entry point for ``python -m namesmith``."""

import sys

from .cli import main

sys.exit(main())
