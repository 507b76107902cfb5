#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Daily impulse: USCCB Gospel -> texts + reflections -> impulses/<date>.json"""

from lumen.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
