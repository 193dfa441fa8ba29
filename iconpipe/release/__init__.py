"""Version bump, changelog, tag and publish workflow for the icon packages."""

from .changelog import ChangelogSectionMissingError, extract_release_notes
from .context import ReleaseAborted, ReleaseContext, ReleaseIO, load_context
from .versions import InvalidVersionError, normalize_version, suggest_version
from .workflow import RELEASE_STEPS, Step, run_release

__all__ = [
    "ChangelogSectionMissingError",
    "InvalidVersionError",
    "RELEASE_STEPS",
    "ReleaseAborted",
    "ReleaseContext",
    "ReleaseIO",
    "Step",
    "extract_release_notes",
    "load_context",
    "normalize_version",
    "run_release",
    "suggest_version",
]
