from __future__ import annotations

from pathlib import Path

import pytest

from fakes import CHANGELOG, SIMPLE_SVG, TITLED_SVG, write_manifest
from iconpipe.icons import IconAsset


@pytest.fixture
def simple_icon() -> IconAsset:
    return IconAsset(file_name="foo.svg", component_name="Foo", raw_svg_markup=SIMPLE_SVG)


@pytest.fixture
def titled_icon() -> IconAsset:
    return IconAsset(file_name="react.svg", component_name="React", raw_svg_markup=TITLED_SVG)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    write_manifest(tmp_path, {"name": "icons-monorepo", "version": "1.9.0", "private": True})
    write_manifest(tmp_path / "packages" / "react", {"name": "@icons/react", "version": "1.9.0"})
    write_manifest(tmp_path / "packages" / "vue", {"name": "@icons/vue", "version": "1.9.0"})
    write_manifest(tmp_path / "packages" / "playground", {"name": "playground", "version": "0.0.0", "private": True})
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG, encoding="utf-8")
    return tmp_path
