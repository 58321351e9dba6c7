from __future__ import annotations

import shutil


def is_command_available(command_name: str) -> bool:
    """Check if an external solver command can be found on the PATH."""
    return shutil.which(command_name) is not None
