"""Weight tracking module.

Keeps a chronologically ordered log of weight readings in fixed-point
tenths of a kilogram and derives a simple moving-average trend.

Key components:
- Weight and WeightRecord value types
- WeightLog with order-preserving insertion and CSV loading
- Trend/status reporting over the moving average
"""

from __future__ import annotations

from muse.tracking.diagnostics import Trend, WeightStatus, generate_status
from muse.tracking.log import WeightLog
from muse.tracking.models import Weight, WeightRecord

__all__ = [
    "Trend",
    "Weight",
    "WeightLog",
    "WeightRecord",
    "WeightStatus",
    "generate_status",
]
