"""Locate the data directory holding images and audio files."""

from __future__ import annotations

import os
import sys
from typing import List, Optional

# src/app/datadir.py -> project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def candidate_dirs(name: str) -> List[str]:
    """Places searched for the data directory, in order."""
    dirs = [os.path.join(os.getcwd(), name)]
    if sys.argv and sys.argv[0]:
        exec_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
        dirs.append(os.path.join(exec_dir, name))
    dirs.append(os.path.join(_PROJECT_ROOT, name))
    return dirs


def find_data_dir(name: str) -> Optional[str]:
    """Return the absolute path of the first existing candidate or None."""
    for path in candidate_dirs(name):
        if os.path.isdir(path):
            return os.path.abspath(path)
    return None
