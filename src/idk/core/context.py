"""Collect local context to send with prompts and project setup requests."""
from __future__ import annotations

import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from idk.client.models import ExecutionContext

README_NAMES = ("README.md", "README", "README.rst", "README.txt", "readme.md")
MAKEFILE_NAMES = ("Makefile", "makefile", "GNUmakefile")


def detect_os() -> str:
    """Operating system identifier sent to the backend (linux, darwin, windows)."""
    return platform.system().lower()


def read_text(path: Optional[Path]) -> str:
    """Read a text file, or return an empty string when there is no path."""
    if path is None:
        return ""
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _find_first(directory: Path, names: tuple) -> Optional[Path]:
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def build_execution_context(
    prompt: str,
    readme_path: Optional[Path] = None,
    existing_script: str = "",
    cwd: Optional[Path] = None,
    os_name: Optional[str] = None,
) -> ExecutionContext:
    """Build the context sent with a prompt. ``os_name`` defaults to the running OS."""
    return ExecutionContext(
        prompt=prompt,
        os=os_name or detect_os(),
        pwd=str(cwd or Path.cwd()),
        readme_data=read_text(readme_path),
        existing_script=existing_script,
    )


@dataclass
class ProjectSnapshot:
    """What the backend needs to work out how to set up a project."""
    folder_name: str
    files: List[str] = field(default_factory=list)
    readme: str = ""
    makefile: str = ""


def collect_project(project_path: Optional[Path] = None) -> ProjectSnapshot:
    """
    Snapshot the top level of a project directory.

    Hidden entries are skipped; directories are listed with a trailing slash.
    """
    root = Path(project_path or Path.cwd()).resolve()

    files = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.name.startswith("."):
            continue
        files.append(f"{entry.name}/" if entry.is_dir() else entry.name)

    return ProjectSnapshot(
        folder_name=root.name,
        files=files,
        readme=read_text(_find_first(root, README_NAMES)),
        makefile=read_text(_find_first(root, MAKEFILE_NAMES)),
    )
