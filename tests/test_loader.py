import asyncio
import re

import pytest

from iconpipe.icons import IconNameCollisionError, component_name_for, load_icons

_PASCAL_IDENT_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


class TestComponentName:
    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("react-dark.svg", "ReactDark"),
            ("NodeJS_Light.svg", "NodeJsLight"),
            ("NodeJS-Light.svg", "NodeJsLight"),
            ("AWS-Dark.svg", "AwsDark"),
            ("CSS.svg", "Css"),
            ("JavaScript.svg", "JavaScript"),
            ("icon2x.svg", "Icon2X"),
            ("aws.svg", "Aws"),
            ("c++ builder.svg", "CBuilder"),
            ("my.icon.svg", "MyIcon"),
            ("3d-model.svg", "Svg3DModel"),
            ("---.svg", "Icon"),
        ],
    )
    def test_derives_pascal_case(self, file_name, expected):
        assert component_name_for(file_name) == expected

    @pytest.mark.parametrize("file_name", ["a.svg", "x--y__z.svg", "9lives.svg", "ünïcode-name.svg", ".svg"])
    def test_always_valid_identifier(self, file_name):
        assert _PASCAL_IDENT_RE.match(component_name_for(file_name))

    def test_deterministic(self):
        assert component_name_for("vue-light.svg") == component_name_for("vue-light.svg")


class TestLoadIcons:
    def test_reads_regular_files_only(self, tmp_path):
        (tmp_path / "react-dark.svg").write_text("<svg/>", encoding="utf-8")
        (tmp_path / "vue.svg").write_text("<svg><path/></svg>", encoding="utf-8")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "skipped.svg").write_text("<svg/>", encoding="utf-8")

        icons = asyncio.run(load_icons(tmp_path))

        by_name = {icon.component_name: icon for icon in icons}
        assert set(by_name) == {"ReactDark", "Vue"}
        assert by_name["Vue"].raw_svg_markup == "<svg><path/></svg>"
        assert by_name["ReactDark"].file_name == "react-dark.svg"

    def test_collision_is_rejected(self, tmp_path):
        (tmp_path / "foo-bar.svg").write_text("<svg/>", encoding="utf-8")
        (tmp_path / "foo_bar.svg").write_text("<svg/>", encoding="utf-8")

        with pytest.raises(IconNameCollisionError) as exc:
            asyncio.run(load_icons(tmp_path))
        assert exc.value.component_name == "FooBar"
        assert set(exc.value.files) == {"foo-bar.svg", "foo_bar.svg"}

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            asyncio.run(load_icons(tmp_path / "nope"))
