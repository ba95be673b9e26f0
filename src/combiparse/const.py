"""
General use constants.
"""

from __future__ import annotations
from typing import Final

import re

NEWLINE: Final[str] = "\n"
UNSIGNED_NUMBER: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
