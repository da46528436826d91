"""
GoFire package.

HTTP control surface for a Mertik Maxitrol GV60 fireplace valve driven
through a 3-channel Raspberry Pi relay board.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
