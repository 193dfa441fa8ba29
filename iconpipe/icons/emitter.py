from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

import aiofiles

from .loader import load_icons
from .models import EmitTarget, Framework, GeneratedArtifact, IconAsset, ModuleFormat
from .modules import ModuleSource, index_source
from .react import react_module
from .schema import SCHEMAS
from .vue import vue_module

MODULE_BUILDERS: dict[Framework, Callable[[IconAsset], ModuleSource]] = {
    Framework.react: react_module,
    Framework.vue: vue_module,
}


def emit(icon: IconAsset, framework: Framework, module_format: ModuleFormat) -> list[GeneratedArtifact]:
    """Component source and type declaration for one icon and target."""
    target = EmitTarget(framework=framework, module_format=module_format)
    module = MODULE_BUILDERS[framework](icon)
    base = f"{target.subdir}/{icon.component_name}"
    return [
        GeneratedArtifact(file_path=f"{base}.js", source_text=module.render(module_format)),
        GeneratedArtifact(file_path=f"{base}.d.ts", source_text=SCHEMAS[framework].declaration(icon.component_name)),
    ]


def emit_index(icons: list[IconAsset], framework: Framework, module_format: ModuleFormat) -> list[GeneratedArtifact]:
    target = EmitTarget(framework=framework, module_format=module_format)
    names = [icon.component_name for icon in icons]
    return [
        GeneratedArtifact(file_path=f"{target.subdir}/index.js", source_text=index_source(names, module_format)),
        # Declarations are always ESM.
        GeneratedArtifact(file_path=f"{target.subdir}/index.d.ts", source_text=index_source(names, ModuleFormat.esm)),
    ]


async def write_artifact(out_dir: Path, artifact: GeneratedArtifact) -> Path:
    path = Path(out_dir) / artifact.file_path
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(artifact.source_text)
    return path


async def _emit_and_write(out_dir: Path, icon: IconAsset, framework: Framework, module_format: ModuleFormat) -> None:
    artifacts = await asyncio.to_thread(emit, icon, framework, module_format)
    await asyncio.gather(*(write_artifact(out_dir, a) for a in artifacts))


async def build(framework: Framework, module_format: ModuleFormat, icons: list[IconAsset], out_dir: Path) -> None:
    """Write every icon's component and declaration, then the index pair."""
    await asyncio.gather(*(_emit_and_write(out_dir, icon, framework, module_format) for icon in icons))
    await asyncio.gather(*(write_artifact(out_dir, a) for a in emit_index(icons, framework, module_format)))


async def build_framework(framework: Framework, assets_dir: Path, packages_dir: Path) -> int:
    """Load the assets once and build both module formats concurrently.

    Output lands in ``packages_dir/<framework>/<format>/``. Returns the icon count.
    """
    icons = await load_icons(assets_dir)
    await asyncio.gather(*(build(framework, fmt, icons, packages_dir) for fmt in ModuleFormat))
    return len(icons)
