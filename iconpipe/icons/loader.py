from __future__ import annotations

import asyncio
import re
from pathlib import Path

import aiofiles

from .models import IconAsset

_WORD_SPLIT_RE = re.compile(r"[^0-9A-Za-z]+")
# "nodeJS" -> "node JS", "AWSDark" -> "AWS Dark"
_HUMP_RE = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_DIGIT_LETTER_RE = re.compile(r"(?<=[0-9])[a-z]")


class IconNameCollisionError(ValueError):
    def __init__(self, component_name: str, first: str, second: str) -> None:
        super().__init__(
            f"Icon files '{first}' and '{second}' both map to component name '{component_name}'"
        )
        self.component_name = component_name
        self.files = (first, second)


def component_name_for(file_name: str) -> str:
    """PascalCase component name for an asset file name.

    Words split on separators and case humps, and runs of capitals are
    lowercased: ``react-dark.svg`` -> ``ReactDark``, ``AWS-Dark.svg`` ->
    ``AwsDark``, ``icon2x.svg`` -> ``Icon2X``.
    """
    words = [
        w
        for chunk in _WORD_SPLIT_RE.split(Path(file_name).stem)
        for w in _HUMP_RE.split(chunk)
        if w
    ]
    name = "".join(w[:1].upper() + w[1:].lower() for w in words)
    name = _DIGIT_LETTER_RE.sub(lambda m: m.group(0).upper(), name)
    if not name:
        return "Icon"
    if name[0].isdigit():
        return f"Svg{name}"
    return name


async def _read_icon(path: Path) -> IconAsset:
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        markup = await f.read()
    return IconAsset(
        file_name=path.name,
        component_name=component_name_for(path.name),
        raw_svg_markup=markup,
    )


def _check_unique(icons: list[IconAsset]) -> None:
    seen: dict[str, str] = {}
    for icon in icons:
        first = seen.get(icon.component_name)
        if first is not None:
            raise IconNameCollisionError(icon.component_name, first, icon.file_name)
        seen[icon.component_name] = icon.file_name


async def load_icons(assets_dir: Path) -> list[IconAsset]:
    """Read every regular file in ``assets_dir`` (non-recursive).

    Order follows the directory listing.
    """
    paths = [p for p in Path(assets_dir).iterdir() if p.is_file()]
    icons = list(await asyncio.gather(*(_read_icon(p) for p in paths)))
    _check_unique(icons)
    return icons
