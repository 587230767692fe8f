"""
Category and color configuration for the Fitness Progress Tracker.

Activities belong to one of six fixed categories. Each category is drawn
in one color from an eight-entry transit-line palette; several
categories may share a color.

Palette names are shown to users as "<Name> Line" (e.g. "Blue Line").
"""

from __future__ import annotations

from fitness_tracker.models.activity import ActivityCategory

# Palette name -> hex color
LINE_COLORS: dict[str, str] = {
    "blue": "#00a1de",
    "red": "#c60c30",
    "purple": "#522398",
    "green": "#009b3a",
    "orange": "#f9461c",
    "brown": "#62361b",
    "yellow": "#f9e300",
    "pink": "#ee97c9",
}

PALETTE: frozenset[str] = frozenset(LINE_COLORS.values())

DEFAULT_CATEGORY_COLORS: dict[ActivityCategory, str] = {
    ActivityCategory.CARDIO: LINE_COLORS["blue"],
    ActivityCategory.STRENGTH: LINE_COLORS["red"],
    ActivityCategory.FLEXIBILITY: LINE_COLORS["purple"],
    ActivityCategory.NUTRITION: LINE_COLORS["green"],
    ActivityCategory.RECOVERY: LINE_COLORS["orange"],
    ActivityCategory.ENDURANCE: LINE_COLORS["brown"],
}

# The add-activity form spells one category out in full
_FORM_LABELS: dict[ActivityCategory, str] = {
    ActivityCategory.STRENGTH: "Strength Training",
}


def category_label(category: ActivityCategory | str) -> str:
    """
    Get the display label for a category.

    Example:
        >>> category_label("cardio")
        "Cardio"
    """
    value = str(category)
    return value[:1].upper() + value[1:]


def category_form_label(category: ActivityCategory) -> str:
    """Label used by the add-activity category picker."""
    return _FORM_LABELS.get(category, category_label(category))


def line_label(color: str) -> str | None:
    """Get the "<Name> Line" label for a palette hex value, or None if off-palette."""
    for name, hex_value in LINE_COLORS.items():
        if hex_value == color.lower():
            return f"{name.capitalize()} Line"
    return None


def is_palette_color(color: str) -> bool:
    """Check if a hex value belongs to the palette."""
    return color.lower() in PALETTE
