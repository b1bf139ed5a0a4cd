"""Writes a desktop entry that launches the service at login."""

from __future__ import annotations

import logging
import os
import sys

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "/opt/QDesktop"


def ensure_service(
    entry_path: str | os.PathLike = DEFAULT_ENTRY,
    exec_path: str | None = None,
) -> bool:
    """Create the autostart entry if it is missing. Return whether it was written."""
    entry_path = os.fspath(entry_path)
    if os.path.exists(entry_path):
        return False
    if exec_path is None:
        exec_path = os.path.abspath(sys.argv[0])
    content = (
        "[Desktop Entry]\n"
        "Type=Application\n"
        "Name=QDesktop Service\n"
        f"Exec={exec_path} -service\n"
        "X-GNOME-Autostart-enabled=true\n"
    )
    try:
        with open(entry_path, "w", encoding="utf-8") as entry:
            entry.write(content)
        os.chmod(entry_path, 0o700)
    except OSError as error:
        logger.debug("Cannot write autostart entry %s: %s", entry_path, error)
        return False
    return True