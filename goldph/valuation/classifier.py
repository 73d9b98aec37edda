"""
Item classifier — отнесение предмета к bucket оценки

Порядок решения:
1. Имя запертого контейнера → sealed_container (стоимость неизвестна
   до открытия, priced bucket недопустим)
2. POOR → vendor_trash
3. UNCOMMON/RARE/EPIC → rare_multi
4. COMMON → gathering для trade goods и рыбы, иначе vendor_trash
5. Остальное → other (не отслеживается)

Рыба определяется слоями: whitelist ID, затем class/subclass,
затем шаблон имени.
"""

from typing import Final

from goldph.core.domain.items import ItemQuality, ValueBucket

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Классы предметов
CLASS_CONSUMABLE: Final[int] = 0
CLASS_TRADE_GOODS: Final[int] = 7

# Подкласс Consumable: рыба
SUBCLASS_CONSUMABLE_FISH: Final[int] = 1

# Подстроки имён запертых контейнеров
SEALED_CONTAINER_PATTERNS: Final[tuple[str, ...]] = (
    "junkbox",
    "strongbox",
    "lockbox",
)

FISH_ITEM_IDS: Final[frozenset[int]] = frozenset(
    {
        6522,  # Deviate Fish
        6359,  # Firefin Snapper
        6358,  # Oily Blackmouth
        13422,  # Stonescale Eel
        13888,  # Darkclaw Lobster
        13889,  # Raw Whitescale Salmon
        13893,  # Large Raw Mightfish
        6317,  # Raw Loch Frenzy
        6361,  # Raw Rainbow Fin Albacore
        6362,  # Raw Rockscale Cod
        8365,  # Raw Mithril Head Trout
        13754,  # Raw Glossy Mightfish
        13755,  # Winter Squid
        13756,  # Raw Summer Bass
        13758,  # Raw Redgill
        13759,  # Raw Nightfin Snapper
        13760,  # Raw Sunscale Salmon
        21153,  # Raw Greater Sagefish
        6289,  # Raw Longjaw Mud Snapper
        6291,  # Raw Brilliant Smallfish
        6303,  # Raw Slitherskin Mackerel
        6308,  # Raw Bristle Whisker Catfish
    }
)

# Ключевые слова для имён вида "Raw <...>"
RAW_FISH_KEYWORDS: Final[tuple[str, ...]] = (
    "fish",
    "snapper",
    "eel",
    "salmon",
    "trout",
    "squid",
    "lobster",
    "bass",
    "mackerel",
    "albacore",
    "cod",
    "redgill",
    "nightfin",
    "sunscale",
)

# Рыба без префикса "Raw"
NAMED_FISH: Final[frozenset[str]] = frozenset(
    {
        "deviate fish",
        "firefin snapper",
        "oily blackmouth",
        "stonescale eel",
        "winter squid",
        "darkclaw lobster",
    }
)


# =============================================================================
# DETECTION
# =============================================================================


def is_sealed_container(name: str | None) -> bool:
    """Запертый контейнер по шаблону имени (без учёта регистра)."""
    if not name:
        return False
    lower_name = name.lower()
    return any(pattern in lower_name for pattern in SEALED_CONTAINER_PATTERNS)


def is_fish(
    item_id: int | None,
    name: str | None,
    item_class: int | None,
    item_subclass: int | None,
) -> bool:
    if item_id is not None and item_id in FISH_ITEM_IDS:
        return True

    if item_class == CLASS_CONSUMABLE and item_subclass == SUBCLASS_CONSUMABLE_FISH:
        return True

    if name:
        lower_name = name.lower()
        if lower_name.startswith("raw ") and any(
            keyword in lower_name for keyword in RAW_FISH_KEYWORDS
        ):
            return True
        if lower_name in NAMED_FISH:
            return True

    return False


# =============================================================================
# CLASSIFICATION
# =============================================================================


def classify_item(
    item_id: int | None,
    name: str | None,
    quality: int | None,
    item_class: int | None = None,
    item_subclass: int | None = None,
) -> ValueBucket:
    """
    Классификация предмета в bucket.

    Examples:
        >>> classify_item(4633, "Heavy Bronze Lockbox", 1, 15)
        <ValueBucket.SEALED_CONTAINER: 'sealed_container'>
        >>> classify_item(2589, "Linen Cloth", 1, 7)
        <ValueBucket.GATHERING: 'gathering'>
    """
    if is_sealed_container(name):
        return ValueBucket.SEALED_CONTAINER

    if quality == ItemQuality.POOR:
        return ValueBucket.VENDOR_TRASH

    if quality in (ItemQuality.UNCOMMON, ItemQuality.RARE, ItemQuality.EPIC):
        return ValueBucket.RARE_MULTI

    if quality == ItemQuality.COMMON:
        if item_class == CLASS_TRADE_GOODS:
            return ValueBucket.GATHERING
        if is_fish(item_id, name, item_class, item_subclass):
            return ValueBucket.GATHERING
        return ValueBucket.VENDOR_TRASH

    return ValueBucket.OTHER
