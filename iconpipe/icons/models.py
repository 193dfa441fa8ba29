from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class Framework(str, Enum):
    react = "react"
    vue = "vue"


class ModuleFormat(str, Enum):
    esm = "esm"
    cjs = "cjs"


class IconAsset(BaseModel):
    """One SVG file from the assets directory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_name: str = Field(..., min_length=1)
    component_name: str
    raw_svg_markup: str

    @field_validator("component_name")
    @classmethod
    def validate_component_name(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"component_name '{value}' is not a valid identifier")
        return value


class EmitTarget(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    framework: Framework
    module_format: ModuleFormat

    @property
    def subdir(self) -> str:
        return f"{self.framework.value}/{self.module_format.value}"


class GeneratedArtifact(BaseModel):
    """A file to write, relative to the packages directory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file_path: str
    source_text: str
