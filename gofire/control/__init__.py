"""
Relay operation recipes and the sequencer that runs them one at a time.
"""

from __future__ import annotations
