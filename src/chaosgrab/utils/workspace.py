"""
Workspace Management Utilities

The workspace is the local root directory holding one subdirectory per
index entry. Entry directories are named directly after the entry, so two
entries with the same name share (and overwrite) one directory.
"""

import logging
from pathlib import Path

from ..core.errors import WorkspaceError


class Workspace:
    """
    Owns the workspace root and maps entry names to directories below it.
    """

    def __init__(self, root: str = "AllChaosData"):
        """
        Args:
            root: Workspace root directory
        """
        self.root = Path(root)
        self.logger = logging.getLogger(__name__)

    def ensure(self) -> Path:
        """
        Create the workspace root if it does not exist yet.

        Existing content is left untouched, so calling this repeatedly is safe.

        Raises:
            WorkspaceError: If the directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Failed to create base directory {self.root}: {e}") from e

        self.logger.debug(f"Workspace ready at: {self.root.absolute()}")
        return self.root

    def entry_dir(self, name: str) -> Path:
        """
        Path of the directory for an entry, without creating it.

        Raises:
            WorkspaceError: If the name is empty or points outside the workspace
        """
        if not name:
            raise WorkspaceError("entry name is empty")

        path = self.root / name
        try:
            path.resolve().relative_to(self.root.resolve())
        except ValueError:
            raise WorkspaceError(f"entry name {name!r} points outside {self.root}") from None
        if path.resolve() == self.root.resolve():
            raise WorkspaceError(f"entry name {name!r} does not name a subdirectory")
        return path

    def create_entry_dir(self, name: str) -> Path:
        """
        Create (if needed) and return the directory for an entry.

        Raises:
            WorkspaceError: If the name is invalid or the directory cannot be created
        """
        path = self.entry_dir(name)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"error creating directory {path}: {e}") from e
        return path
