"""
Money formatting — отображение copper сумм и длительностей

1 gold = 100 silver = 10_000 copper.
"""

from typing import Final

COPPER_PER_SILVER: Final[int] = 100
COPPER_PER_GOLD: Final[int] = 10_000


def _with_commas(value: int) -> str:
    return f"{value:,}"


def format_money(copper: int) -> str:
    """
    Форматирование суммы в copper.

    - >= 1g: золото с разделителями тысяч и серебро, copper не показывается
    - < 1g: серебро и copper
    - Отрицательный знак никогда не ставится перед "0c"

    Examples:
        >>> format_money(1234567)
        '123g 45s'
        >>> format_money(503)
        '5s 3c'
        >>> format_money(-42)
        '-42c'
        >>> format_money(0)
        '0c'
    """
    if not copper:
        return "0c"

    is_negative = copper < 0
    abs_copper = abs(copper)

    gold = abs_copper // COPPER_PER_GOLD
    silver = (abs_copper % COPPER_PER_GOLD) // COPPER_PER_SILVER
    copper_rem = abs_copper % COPPER_PER_SILVER

    if gold > 0:
        if silver > 0:
            result = f"{_with_commas(gold)}g {silver:02d}s"
        else:
            result = f"{_with_commas(gold)}g"
    elif silver > 0:
        result = f"{silver}s {copper_rem}c" if copper_rem > 0 else f"{silver}s"
    else:
        result = f"{copper_rem}c"

    if is_negative and result != "0c":
        return "-" + result
    return result


def format_money_short(copper: int) -> str:
    """
    Короткий формат `Xg YYs` для rate и компактных отображений.

    Copper игнорируется.

    Examples:
        >>> format_money_short(1234567)
        '123g 45s'
        >>> format_money_short(99)
        '0g 00s'
    """
    if not copper:
        return "0g 00s"

    is_negative = copper < 0
    abs_copper = abs(copper)

    gold = abs_copper // COPPER_PER_GOLD
    silver = (abs_copper % COPPER_PER_GOLD) // COPPER_PER_SILVER
    result = f"{_with_commas(gold)}g {silver:02d}s"

    if is_negative and result != "0g 00s":
        return "-" + result
    return result


def format_duration(seconds: float) -> str:
    """
    Форматирование длительности: `1h 2m 3s`, `2m 3s`, `3s`.

    Examples:
        >>> format_duration(3723)
        '1h 2m 3s'
        >>> format_duration(59.9)
        '59s'
    """
    total = int(seconds) if seconds > 0 else 0
    hours = total // 3600
    mins = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}h {mins}m {secs}s"
    if mins > 0:
        return f"{mins}m {secs}s"
    return f"{secs}s"
