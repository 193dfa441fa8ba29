from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from iconpipe import console


class CommandError(RuntimeError):
    def __init__(self, command: str, returncode: int, output: str) -> None:
        super().__init__(f"Command failed ({returncode}): {command}\n{output.strip()}")
        self.command = command
        self.returncode = returncode
        self.output = output


@dataclass(frozen=True)
class Shell:
    """Runs external tools (git, pnpm, conventional-changelog) from ``cwd``."""

    cwd: Path
    dry_run: bool = False

    def run(self, args: list[str], *, cwd: Path | None = None) -> str:
        command = shlex.join(args)
        try:
            proc = subprocess.run(args, cwd=cwd or self.cwd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise CommandError(command, 127, str(e)) from e
        if proc.returncode != 0:
            raise CommandError(command, proc.returncode, (proc.stdout or "") + (proc.stderr or ""))
        return proc.stdout or ""

    def run_if_not_dry(self, args: list[str], *, cwd: Path | None = None) -> str:
        if self.dry_run:
            console.dry_run(shlex.join(args))
            return ""
        return self.run(args, cwd=cwd)
