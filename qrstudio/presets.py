# -*- coding: utf-8 -*-
"""Named foreground/background color pairs offered by the front end."""

from typing import List, NamedTuple


class ColorPreset(NamedTuple):
    name: str
    dark: str
    light: str


PRESETS: List[ColorPreset] = [
    ColorPreset('Classic', '#000000', '#ffffff'),
    ColorPreset('Ocean', '#1e3a8a', '#dbeafe'),
    ColorPreset('Forest', '#166534', '#dcfce7'),
    ColorPreset('Sunset', '#dc2626', '#fef2f2'),
    ColorPreset('Purple', '#7c3aed', '#f3e8ff'),
    ColorPreset('Amber', '#d97706', '#fef3c7'),
]


def get_preset(name: str) -> ColorPreset:
    """Look up a preset by name, ignoring case."""
    wanted = (name or '').strip().lower()
    for preset in PRESETS:
        if preset.name.lower() == wanted:
            return preset
    raise KeyError(name)
