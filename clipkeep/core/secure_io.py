"""Secure file helpers for clipkeep data files.

Clipboard history can hold passwords and other secrets copied by the user,
so the data directory and database file are created owner-only.
"""

import os
import stat
from pathlib import Path

# Owner-only directory permissions
SECURE_DIR_MODE: int = stat.S_IRWXU  # 0o700

# Owner read/write only
SECURE_FILE_MODE: int = stat.S_IRUSR | stat.S_IWUSR  # 0o600


def secure_mkdir(path: Path, parents: bool = True) -> None:
    """Create directory with secure permissions (0o700).

    Missing parents are created with the same mode. Unlike Path.mkdir(),
    this also tightens the permissions of the final directory when it
    already exists.

    Args:
        path: Directory path to create.
        parents: If True, create parent directories as needed.
    """
    if parents:
        for parent in reversed(list(path.parents)):
            if not parent.exists():
                parent.mkdir(mode=SECURE_DIR_MODE)
                # Re-apply in case umask interfered
                os.chmod(parent, SECURE_DIR_MODE)

    if not path.exists():
        path.mkdir(mode=SECURE_DIR_MODE)

    os.chmod(path, SECURE_DIR_MODE)


def secure_create_file(path: Path) -> bool:
    """Create an empty file with 0o600 permissions if it does not exist.

    Uses O_CREAT | O_EXCL so the file never exists with looser permissions.

    Args:
        path: File to create.

    Returns:
        True if the file was created, False if it already existed.
    """
    try:
        fd = os.open(
            str(path),
            os.O_CREAT | os.O_EXCL | os.O_WRONLY,
            SECURE_FILE_MODE,
        )
    except FileExistsError:
        return False
    os.close(fd)
    return True
