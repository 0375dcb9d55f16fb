# src/taskpad/tasks/icons.py

from __future__ import annotations

# Ordered catalog; tasks store the index, never the key or a UI object.
ICON_CATALOG: tuple[str, ...] = (
    "android",
    "warning",
    "star",
    "adjust",
    "airplane",
    "deck",
    "report",
    "access_time",
    "add_location",
    "add_link",
    "computer",
    "directions_car",
)

DEFAULT_ICON = 0


def is_valid_icon(icon: object) -> bool:
    # bool is an int subclass; True must not pass as index 1.
    if isinstance(icon, bool) or not isinstance(icon, int):
        return False
    return 0 <= icon < len(ICON_CATALOG)


def icon_key(icon: int) -> str:
    """Catalog key for rendering; unknown indexes fall back to the default icon."""
    if not is_valid_icon(icon):
        return ICON_CATALOG[DEFAULT_ICON]
    return ICON_CATALOG[icon]


def icon_index(key: str) -> int | None:
    k = (key or "").strip().lower()
    try:
        return ICON_CATALOG.index(k)
    except ValueError:
        return None
