"""Directory browsing with listing, search, rename and delete."""

from __future__ import annotations

import os
from pathlib import Path

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB


def format_file_size(size: int) -> str:
    """Format a byte count as B, KB, MB or GB."""
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.1f} MB"
    if size >= _KB:
        return f"{size / _KB:.0f} KB"
    return f"{size} B"


def _normalise(path: str | os.PathLike) -> str:
    return os.path.normpath(os.path.abspath(os.fspath(path)))


class FileExplorer:
    """Tracks a current directory below a home directory."""

    def __init__(self, home: str | os.PathLike | None = None) -> None:
        self.home = _normalise(home if home is not None else Path.home())
        self._current = self.home

    def _entries(self) -> list[str]:
        try:
            names = os.listdir(self._current)
        except OSError:
            return []
        visible = [
            name
            for name in names
            if not name.startswith(".")
            and (os.path.isfile(os.path.join(self._current, name))
                 or os.path.isdir(os.path.join(self._current, name)))
        ]
        return sorted(visible, key=lambda name: (name.lower(), name))

    def _describe(self, name: str) -> dict[str, str]:
        kind = "folder" if os.path.isdir(os.path.join(self._current, name)) else "file"
        return {"name": name, "type": kind}

    def file_model(self) -> list[dict[str, str]]:
        """List the current directory, led by ``..`` when away from home."""
        model = []
        if self._current != self.home:
            model.append({"name": "..", "type": "folder"})
        model.extend(self._describe(name) for name in self._entries())
        return model

    def open(self, name: str) -> bool:
        """Enter ``name`` if it is a directory. Return whether the directory changed."""
        target = os.path.join(self._current, name)
        if not os.path.isdir(target):
            return False
        self._current = _normalise(target)
        return True

    def go_up(self) -> bool:
        """Move to the parent directory. Return whether that was possible."""
        parent = os.path.dirname(self._current)
        if parent == self._current or not os.path.isdir(parent):
            return False
        self._current = parent
        return True

    def go_home(self) -> None:
        self._current = self.home

    def current_path(self) -> str:
        return self._current

    def file_size(self, name: str) -> str:
        """Formatted size of a regular file, or an empty string otherwise."""
        path = os.path.join(self._current, name)
        if os.path.isfile(path):
            return format_file_size(os.path.getsize(path))
        return ""

    def delete(self, name: str) -> bool:
        """Remove a file. Return whether it was removed."""
        try:
            os.remove(os.path.join(self._current, name))
        except OSError:
            return False
        return True

    def rename(self, old_name: str, new_name: str) -> bool:
        """Rename without overwriting. Return whether it was renamed."""
        old_path = os.path.join(self._current, old_name)
        new_path = os.path.join(self._current, new_name)
        if not os.path.lexists(old_path) or os.path.lexists(new_path):
            return False
        try:
            os.rename(old_path, new_path)
        except OSError:
            return False
        return True

    def search(self, keyword: str) -> list[dict[str, str]]:
        """Entries of the current directory whose names contain ``keyword``, ignoring case."""
        needle = keyword.casefold()
        return [
            self._describe(name)
            for name in self._entries()
            if needle in name.casefold()
        ]