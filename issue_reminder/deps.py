from __future__ import annotations

import shutil


class DependencyMissingError(Exception):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__("\n".join(f"Need {name} installed" for name in missing))


def check_commands(*names: str) -> None:
    """Raise if any of ``names`` is not an executable on PATH."""
    if not names:
        raise ValueError("check_commands() needs at least one command name")
    missing = [name for name in names if shutil.which(name) is None]
    if missing:
        raise DependencyMissingError(missing)
