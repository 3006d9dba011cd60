"""Line style palette assigned to tracks by position."""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

from .config import STYLE_OVERFLOW_POLICY
from .errors import StyleCatalogExhausted
from .models import LineStyle

# KML colours are aabbggrr.
DEFAULT_STYLES: Tuple[LineStyle, ...] = (
    LineStyle("red", "C81400FF", 4),
    LineStyle("blue", "C8FF7800", 4),
    LineStyle("pink", "96F0FF14", 4),
    LineStyle("green", "C878FF00", 4),
    LineStyle("orange", "C81478FF", 4),
    LineStyle("dark_green", "96008C14", 4),
    LineStyle("pink2", "C8A078F0", 4),
)

OVERFLOW_POLICIES = ("cycle", "strict")


class StylePalette:
    """Ordered, read-only catalog of line styles.

    ``overflow`` decides what happens past the last entry: ``"cycle"`` starts
    over from the first style, ``"strict"`` raises
    :class:`StyleCatalogExhausted`.
    """

    def __init__(
        self,
        styles: Sequence[LineStyle] = DEFAULT_STYLES,
        overflow: str = STYLE_OVERFLOW_POLICY,
    ) -> None:
        if not styles:
            raise ValueError("A style palette needs at least one style")
        if overflow not in OVERFLOW_POLICIES:
            raise ValueError(
                f"Unknown overflow policy {overflow!r}; expected one of {OVERFLOW_POLICIES}"
            )
        self._styles = tuple(styles)
        self.overflow = overflow

    def __len__(self) -> int:
        return len(self._styles)

    def __iter__(self) -> Iterator[LineStyle]:
        return iter(self._styles)

    def at(self, index: int) -> LineStyle:
        if index < 0:
            raise ValueError(f"Style index must be non-negative, got {index}")
        if index < len(self._styles):
            return self._styles[index]
        if self.overflow == "strict":
            raise StyleCatalogExhausted(
                f"Track #{index + 1} needs a style but the palette only has "
                f"{len(self._styles)}; use the 'cycle' overflow policy or "
                "convert fewer tracks"
            )
        return self._styles[index % len(self._styles)]


def style_for(index: int) -> LineStyle:
    """Style for the track at ``index`` using the default cycling palette."""

    return _DEFAULT_PALETTE.at(index)


_DEFAULT_PALETTE = StylePalette(DEFAULT_STYLES, overflow="cycle")
