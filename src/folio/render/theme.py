"""Colour palettes for the light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True, slots=True)
class Palette:
    table_bg: str
    border: str
    header_bg: str
    header_text: str
    cell_text: str
    label_text: str
    shadow: str
    row_outline: str
    caption_text: str


_PALETTES: dict[Theme, Palette] = {
    Theme.DARK: Palette(
        table_bg="rgba(30,32,38,0.96)",
        border="rgba(255,255,255,0.02)",
        header_bg="linear-gradient(90deg, rgba(255,255,255,0.12), rgba(255,255,255,0.04))",
        header_text="white",
        cell_text="rgba(255,255,255,0.92)",
        label_text="white",
        shadow="0 0 25px rgba(255,255,255,0.08)",
        row_outline="1px solid rgba(255,255,255,0.03)",
        caption_text="rgba(255,255,255,0.7)",
    ),
    Theme.LIGHT: Palette(
        table_bg="rgba(255,255,255,0.98)",
        border="rgba(0,0,0,0.10)",
        header_bg="linear-gradient(90deg, rgba(0,0,0,0.04), rgba(0,0,0,0.01))",
        header_text="#222",
        cell_text="#222",
        label_text="#111",
        shadow="0 0 25px rgba(0,0,0,0.06)",
        row_outline="1px solid rgba(0,0,0,0.02)",
        caption_text="rgba(0,0,0,0.6)",
    ),
}


def palette_for(theme: Theme | str) -> Palette:
    return _PALETTES[Theme(theme)]
