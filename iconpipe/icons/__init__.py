"""SVG asset loading and React/Vue component generation."""

from .emitter import build, build_framework, emit, emit_index
from .loader import IconNameCollisionError, component_name_for, load_icons
from .models import EmitTarget, Framework, GeneratedArtifact, IconAsset, ModuleFormat
from .svg import SvgParseError

__all__ = [
    "EmitTarget",
    "Framework",
    "GeneratedArtifact",
    "IconAsset",
    "IconNameCollisionError",
    "ModuleFormat",
    "SvgParseError",
    "build",
    "build_framework",
    "component_name_for",
    "emit",
    "emit_index",
    "load_icons",
]
