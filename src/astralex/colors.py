"""RGB color values, derivations, and sources of per-scope colors."""

from __future__ import annotations

import colorsys
import random
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import cycle
from typing import Protocol

from rich.color import Color, ColorParseError, ColorSystem, blend_rgb
from rich.color_triplet import ColorTriplet
from rich.style import Style

from astralex.errors import ConfigError

# Step used by the lighter / darker / brighter shorthands
STEP = 0.2

_WHITE = ColorTriplet(255, 255, 255)
_BLACK = ColorTriplet(0, 0, 0)


@dataclass(frozen=True, slots=True)
class RGB:
    """An immutable 24-bit color."""

    red: int
    green: int
    blue: int

    @classmethod
    def from_triplet(cls, triplet: ColorTriplet) -> RGB:
        return cls(triplet.red, triplet.green, triplet.blue)

    @classmethod
    def parse(cls, value: str) -> RGB:
        """Parse a hex code, ``rgb(r,g,b)`` or a color name."""
        try:
            color = Color.parse(value)
        except ColorParseError as exc:
            raise ConfigError(f"invalid color {value!r}: {exc}") from None
        return cls.from_triplet(color.get_truecolor())

    @property
    def triplet(self) -> ColorTriplet:
        return ColorTriplet(self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        return self.triplet.hex

    def lighten(self, amount: float = STEP) -> RGB:
        return RGB.from_triplet(blend_rgb(self.triplet, _WHITE, amount))

    def darken(self, amount: float = STEP) -> RGB:
        return RGB.from_triplet(blend_rgb(self.triplet, _BLACK, amount))

    def brighten(self, amount: float = STEP) -> RGB:
        """Raise the brightness while keeping hue and saturation."""
        h, s, v = colorsys.rgb_to_hsv(*self.triplet.normalized)
        r, g, b = colorsys.hsv_to_rgb(h, s, min(1.0, v * (1.0 + amount)))
        return RGB(round(r * 255), round(g * 255), round(b * 255))

    @property
    def lighter(self) -> RGB:
        return self.lighten()

    @property
    def darker(self) -> RGB:
        return self.darken()

    @property
    def brighter(self) -> RGB:
        return self.brighten()

    def paint(self, text: str) -> str:
        """Wrap *text* in 24-bit foreground color escape codes."""
        style = Style(color=Color.from_triplet(self.triplet))
        return style.render(text, color_system=ColorSystem.TRUECOLOR)


# Base palette, xterm-like normal intensities so brighten() has headroom
RED = RGB(205, 49, 49)
GREEN = RGB(13, 188, 121)
YELLOW = RGB(229, 229, 16)
BLUE = RGB(36, 114, 200)
MAGENTA = RGB(188, 63, 188)
CYAN = RGB(17, 168, 205)
GRAY = RGB(128, 128, 128)
ORANGE = RGB(215, 135, 0)


class ColorSource(Protocol):
    """Supplies a new, visually distinguishable color for each scope."""

    def next_color(self) -> RGB: ...


class RandomColors:
    """Pseudo-random saturated colors, avoiding hues close to the previous one."""

    MIN_HUE_DISTANCE = 0.1
    ATTEMPTS = 8

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._last_hue: float | None = None

    @classmethod
    def seeded(cls, seed: int) -> RandomColors:
        return cls(random.Random(seed))

    def _hue(self) -> float:
        hue = self._rng.random()
        for _ in range(self.ATTEMPTS):
            if self._last_hue is None or _hue_distance(hue, self._last_hue) >= self.MIN_HUE_DISTANCE:
                break
            hue = self._rng.random()
        return hue

    def next_color(self) -> RGB:
        hue = self._hue()
        self._last_hue = hue
        saturation = self._rng.uniform(0.55, 1.0)
        value = self._rng.uniform(0.75, 1.0)
        r, g, b = colorsys.hsv_to_rgb(hue, saturation, value)
        return RGB(round(r * 255), round(g * 255), round(b * 255))


class CycleColors:
    """Deterministic colors: repeats a fixed palette in order."""

    def __init__(self, palette: Iterable[RGB] = (RED, GREEN, BLUE, YELLOW, MAGENTA, CYAN)) -> None:
        colors = tuple(palette)
        if not colors:
            raise ValueError("palette must not be empty")
        self._colors = cycle(colors)

    def next_color(self) -> RGB:
        return next(self._colors)


def _hue_distance(a: float, b: float) -> float:
    d = abs(a - b)
    return min(d, 1.0 - d)
