from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import Optional


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version("modex")
    except importlib.metadata.PackageNotFoundError:
        return None


def get_version_string() -> str:
    """Return '<version> <short commit>' with whatever is known."""
    version = _installed_version() or "unknown"
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "--short=7", "HEAD"], cwd=str(here))
    if commit:
        return f"{version} {commit}"
    return version
