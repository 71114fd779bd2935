"""Color palette: IRC color index -> display color name."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from ircformat.core.constants import DEFAULT_COLORS


class ColorPalette:
    """Mutable mapping of color indices to color strings.

    Seeded with the 16 standard mIRC colors. Any integer is a valid index;
    lookups of unmapped indices return the caller's default instead of
    failing. Instances are passed explicitly to each formatting call and
    are not locked: guard shared palettes yourself if another thread
    writes while conversions run.
    """

    def __init__(self, colors: Mapping[int, str] | None = None) -> None:
        self._colors: dict[int, str] = dict(DEFAULT_COLORS)
        if colors:
            self.update(colors)

    def get(self, index: int, default: str) -> str:
        """Return the color for ``index``, or ``default`` if unmapped."""
        return self._colors.get(index, default)

    def set(self, index: int, color: str) -> None:
        """Insert or replace the color for ``index``."""
        self._colors[int(index)] = color

    def update(self, colors: Mapping[int, str]) -> None:
        for index, color in colors.items():
            self.set(int(index), str(color))

    def items(self) -> list[tuple[int, str]]:
        return sorted(self._colors.items())

    def copy(self) -> ColorPalette:
        palette = ColorPalette()
        palette._colors = dict(self._colors)
        return palette

    def __contains__(self, index: object) -> bool:
        return index in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._colors))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorPalette):
            return NotImplemented
        return self._colors == other._colors

    def __repr__(self) -> str:
        return f"ColorPalette({self._colors!r})"
