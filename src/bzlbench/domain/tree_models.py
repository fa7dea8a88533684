from __future__ import annotations

"""
Layout Preview Data Models.

Provides the recursive type definitions used to describe the directory
layout of a generated workspace before (or instead of) writing it.
"""

from dataclasses import dataclass
from typing import Dict, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    Represents a leaf entry (file) in the layout tree.

    Attributes:
        path: Workspace-relative path of the file.
    """
    path: str

Tree = Dict[str, Union["Tree", FileNode]]
