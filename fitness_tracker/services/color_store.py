"""
Category color map.

Process-wide display configuration: one palette color per category.
Unlike the collections, colors are written on every change, including a
reset back to the defaults.
"""

from __future__ import annotations

from fitness_tracker.config.categories import DEFAULT_CATEGORY_COLORS, is_palette_color
from fitness_tracker.lib.exceptions import ValidationError
from fitness_tracker.models.activity import ActivityCategory
from fitness_tracker.services.persistence import COLORS_KEY, PersistenceMirror
from fitness_tracker.services.serialization import dumps


class CategoryColorMap:
    """Mapping of the six categories to palette colors."""

    def __init__(
        self,
        mirror: PersistenceMirror | None = None,
        colors: dict[ActivityCategory, str] | None = None,
    ) -> None:
        self._mirror = mirror
        self._colors: dict[ActivityCategory, str] = dict(DEFAULT_CATEGORY_COLORS)
        if colors:
            self._colors.update(colors)

    def get(self, category: ActivityCategory | str) -> str:
        return self._colors[ActivityCategory(category)]

    def set(self, category: ActivityCategory | str, color: str) -> None:
        """
        Assign a palette color to a category and persist the whole map.

        Raises:
            ValidationError: unknown category or color outside the palette
        """
        try:
            key = ActivityCategory(category)
        except ValueError as exc:
            raise ValidationError(f"Unknown category: {category!r}") from exc
        if not is_palette_color(color):
            raise ValidationError(f"Color {color!r} is not in the line palette")
        self._colors[key] = color.lower()
        self._persist()

    def reset(self) -> None:
        """Restore the default mapping and persist it."""
        self._colors = dict(DEFAULT_CATEGORY_COLORS)
        self._persist()

    def replace_all(self, colors: dict[ActivityCategory, str]) -> None:
        """Swap in a loaded mapping without writing it back."""
        self._colors = dict(DEFAULT_CATEGORY_COLORS)
        self._colors.update(colors)

    def as_dict(self) -> dict[str, str]:
        """Category name -> hex color, in category order."""
        return {category.value: self._colors[category] for category in ActivityCategory}

    def _persist(self) -> None:
        if self._mirror is None:
            return
        self._mirror.schedule_set(COLORS_KEY, dumps(self.as_dict()))
