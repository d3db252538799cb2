"""The workspace drawer: the list of opened files and which one is active."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from itools.editor import Editor
from itools.fileobject import FileObject

log = logging.getLogger(__name__)

WIDTH = 256


def file_name_of(file_path: str) -> str:
    """The part of ``file_path`` after the last '/'; empty for an empty path."""
    if not file_path:
        return ""
    return file_path.rpartition("/")[2]


@dataclass(eq=False)
class FileEntry:
    """One file shown in the workspace."""

    file_path: str
    file_name: str = ""
    active: bool = False


class _FileStore(Protocol):
    def insert_file(self, file_path: str, file_name: str) -> bool: ...

    def find_previously_opened_files(self) -> Iterable[FileObject]: ...

    def delete_file(self, file_path: str) -> None: ...


class _MemoryStore:
    def __init__(self) -> None:
        self.files: list[FileObject] = []

    def insert_file(self, file_path: str, file_name: str) -> bool:
        self.files.append(FileObject(file_name=file_name, file_path=file_path))
        return True

    def find_previously_opened_files(self) -> list[FileObject]:
        return list(self.files)

    def delete_file(self, file_path: str) -> None:
        self.files = [f for f in self.files if f.file_path != file_path]


class Workspace:
    """Keeps the opened files, remembers them in a store and opens them in the editor."""

    def __init__(self, editor: Optional[Editor] = None, store: Optional[_FileStore] = None) -> None:
        self.editor = editor
        self.store = store if store is not None else _MemoryStore()
        self.entries: list[FileEntry] = []
        self.visible = True
        self._active: Optional[FileEntry] = None
        self.show_previously_opened_files()

    def toggle(self) -> None:
        """Show the drawer if hidden, hide it if shown."""
        self.visible = not self.visible

    def _create_entry(self, file_path: str, file_name: str, auto_open: bool) -> FileEntry:
        entry = FileEntry(file_path)
        self.entries.append(entry)
        try:
            if file_path:
                entry.file_name = file_name
                if auto_open:
                    self.activate(entry)
        except Exception:
            self.entries.remove(entry)
            if self._active is entry:
                self._active = None
            raise
        return entry

    def add_file(self, file_path: str) -> Optional[FileEntry]:
        """Remember ``file_path`` and open it; None when the store refuses it."""
        file_name = file_name_of(file_path)
        if not self.store.insert_file(file_path, file_name):
            return None
        return self._create_entry(file_path, file_name, True)

    def activate(self, entry: FileEntry) -> None:
        """Make ``entry`` the active file and open it for editing."""
        if entry is self._active:
            return
        if self._active is not None:
            self._active.active = False
        entry.active = True
        self._active = entry
        if self.editor is not None:
            self.editor.open_and_parse_file(entry.file_path, read_only=False)

    def show_previously_opened_files(self) -> None:
        """List the files from the store, opening the first; broken ones are forgotten."""
        first = True
        for file in self.store.find_previously_opened_files():
            try:
                self._create_entry(file.file_path, file.file_name, first)
                first = False
            except Exception as exc:
                log.warning("Dropping %s: %s", file.file_path, exc)
                self.store.delete_file(file.file_path)

    @property
    def active(self) -> Optional[FileEntry]:
        """The entry currently open in the editor."""
        return self._active