from pathlib import Path
from typing import Optional

PROJECT_MARKER = "pyproject.toml"

def get_project_root(start: Optional[Path] = None) -> Path:
    """
    Walk up from ``start`` (this package by default) to the first directory
    holding pyproject.toml. Installed copies have none, so fall back to the
    current working directory.
    """
    current_path = Path(start or __file__).resolve()
    for parent in [current_path, *current_path.parents]:
        if (parent / PROJECT_MARKER).exists():
            return parent
    return Path.cwd()
