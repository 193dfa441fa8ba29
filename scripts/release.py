#!/usr/bin/env python3
from __future__ import annotations

from iconpipe.cli import release_main

if __name__ == "__main__":
    raise SystemExit(release_main())
