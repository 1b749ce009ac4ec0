import math


def round_half_up(value: float) -> int:
    """Round .5 upwards, the way the dashboard has always displayed percentages."""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))
