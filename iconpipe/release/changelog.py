from __future__ import annotations

import re
from pathlib import Path

CHANGELOG_FILE = "CHANGELOG.md"


class ChangelogSectionMissingError(ValueError):
    pass


def _section_re(version: str) -> re.Pattern[str]:
    # "## 1.3.0 (2024-05-01)" or "# [2.0.0](https://...compare/v1.9.0...v2.0.0) (2024-05-01)".
    # The section runs until the next h1/h2 heading or the end of the file.
    v = re.escape(version)
    return re.compile(
        rf"^#{{1,2}} \[?{v}\]?(?:\([^)\n]*\))? \(([^)\n]*)\)\n\n(.*?)(?=\n+#{{1,2}}\s|\Z)",
        re.MULTILINE | re.DOTALL,
    )


def extract_release_notes(changelog: str, version: str) -> str:
    m = _section_re(version).search(changelog)
    if not m:
        raise ChangelogSectionMissingError(f"No changelog section found for version {version}")
    return m.group(2).strip()


def read_release_notes(root: Path, version: str) -> str:
    text = (Path(root) / CHANGELOG_FILE).read_text(encoding="utf-8")
    return extract_release_notes(text, version)
