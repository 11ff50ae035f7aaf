import math
from typing import Sequence

from wheel_analyzer.core.alphabet import OUTCOMES


def is_valid_outcome(value, outcomes: Sequence[int] = OUTCOMES) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in outcomes


def is_valid_timestamp(value) -> bool:
    # json.loads accepts NaN and Infinity
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
