"""Fill in whatever the model left out of the ``tokens`` object.

The provider is asked for all six token fields but nothing forces it to comply,
so every field is checked for presence and shape and replaced with a default
when it is absent, null or of the wrong type. A list the model sent empty is
kept as an empty list.
"""

from typing import Any

from design_api.models.response import ColorToken, DesignTokens, Typography

DEFAULT_TYPOGRAPHY = {
    "headings": "Sans-serif, semi-bold",
    "body": "Sans-serif, regular",
    "weights": ["400", "600"],
}
DEFAULT_SPACING = ["4px", "8px", "16px", "24px", "32px"]
DEFAULT_RADIUS = ["4px", "8px", "12px"]


def _string_list(value: Any, default: list[str]) -> list[str]:
    # An empty list from the model means "none", not an omission
    if not isinstance(value, list):
        return list(default)
    items = []
    for item in value:
        if isinstance(item, bool):
            continue
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)):
            items.append(str(item))
    if value and not items:
        return list(default)
    return items


def _colors(value: Any) -> list[ColorToken]:
    if not isinstance(value, list):
        return []
    return [
        ColorToken(name=item["name"], hex=item["hex"])
        for item in value
        if isinstance(item, dict) and isinstance(item.get("name"), str) and isinstance(item.get("hex"), str)
    ]


def _typography(value: Any) -> Typography:
    if not value or not isinstance(value, dict):
        return Typography.model_validate(DEFAULT_TYPOGRAPHY)
    headings = value.get("headings")
    body = value.get("body")
    return Typography(
        headings=headings if headings and isinstance(headings, str) else DEFAULT_TYPOGRAPHY["headings"],
        body=body if body and isinstance(body, str) else DEFAULT_TYPOGRAPHY["body"],
        weights=_string_list(value.get("weights"), DEFAULT_TYPOGRAPHY["weights"]),
    )


def normalize_tokens(partial: dict[str, Any]) -> DesignTokens:
    """Return a fully populated DesignTokens from a possibly partial ``tokens`` object."""
    return DesignTokens(
        colors=_colors(partial.get("colors")),
        typography=_typography(partial.get("typography")),
        spacing=_string_list(partial.get("spacing"), DEFAULT_SPACING),
        animations=_string_list(partial.get("animations"), []),
        elevation=_string_list(partial.get("elevation"), []),
        radius=_string_list(partial.get("radius"), DEFAULT_RADIUS),
    )
