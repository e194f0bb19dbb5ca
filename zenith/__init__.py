"""Zenith - weekly schedule planning for students.

Fixed time blocks and discretionary activities are reconciled by a pure
reducer (``zenith.schedule``); free time, productivity and recommendations
are derived from the resulting state (``zenith.metrics``,
``zenith.recommendations``).
"""

__version__ = "0.3.0"
