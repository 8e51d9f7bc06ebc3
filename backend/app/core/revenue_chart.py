"""Revenue Chart — y-axis scale for the monthly revenue bar chart.

Invariants:
    - top_label is the highest monthly total rounded UP to the next thousand
    - Labels run from top_label down to 0 in steps of 1000, formatted "$NK"
    - Empty revenue yields a single "$0K" label with top_label 0 (never raises)
"""

import math
from decimal import Decimal

Y_AXIS_STEP: int = 1000


def generate_y_axis(revenue: list[Decimal]) -> tuple[list[str], int]:
    """Compute (labels, top_label) for monthly revenue totals in major units."""
    highest = max(revenue, default=Decimal(0))
    top_label = math.ceil(highest / Y_AXIS_STEP) * Y_AXIS_STEP
    labels = [
        f"${value // Y_AXIS_STEP}K"
        for value in range(top_label, -1, -Y_AXIS_STEP)
    ]
    return labels, top_label
