from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, output directory bootstrapping and the small
set of write primitives used by the emission layer. Every operation here
lets OSError propagate: a failed write aborts the generation run.
"""

import logging
import os
import shutil
from typing import Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DIRECTORY MANAGEMENT
# -----------------------------------------------------------------------------

def reset_output_dir(path: str) -> None:
    """
    Wipe and recreate the output directory.

    A missing directory is not an error; any other failure is.

    Args:
        path: Directory to recreate.

    Raises:
        OSError: If removal or creation fails.
    """
    if os.path.isdir(path):
        logger.debug(f"Removing existing output directory: {path}")
        shutil.rmtree(path)
    elif os.path.exists(path):
        os.remove(path)
    os.makedirs(path, exist_ok=True)


def ensure_dir(path: str) -> None:
    """Create a directory hierarchy, tolerating one that already exists."""
    os.makedirs(path, exist_ok=True)

# -----------------------------------------------------------------------------
# FILE WRITING API
# -----------------------------------------------------------------------------

def write_text_file(path: str, content: str) -> None:
    """
    Create or truncate a text file with the given content.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def copy_file(source: str, destination: str) -> None:
    """
    Copy a file byte for byte.

    Raises:
        FileNotFoundError: If the source file is missing.
        OSError: On any other copy failure.
    """
    if not os.path.isfile(source):
        raise FileNotFoundError(f"Source file not found: {source}")
    shutil.copyfile(source, destination)
