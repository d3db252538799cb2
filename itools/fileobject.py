"""A file known to the workspace: its display name and its full path."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FileObject:
    """A file that has been opened in the workspace."""

    file_name: str = ""
    file_path: str = ""

    @classmethod
    def from_path(cls, path: str) -> FileObject:
        """Build a file object whose name is the part of ``path`` after the last '/'."""
        _, _, name = path.rpartition("/")
        return cls(file_name=name, file_path=path)