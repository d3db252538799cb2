"""Application version, update manifests and downloading new releases."""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
from urllib.request import urlopen

log = logging.getLogger(__name__)

APP_VERSION = (1, 0, 0)

_network_lock = threading.Lock()

_MANIFEST_KEYS = {
    "latestVersion": "latest_version",
    "downloadUrl": "download_url",
    "releaseNotes": "release_notes",
}


@dataclass
class UpdateInfo:
    """What the update manifest says about the latest release."""

    latest_version: str = ""
    download_url: str = ""
    release_notes: str = ""


def split_version(text: str) -> list[str]:
    """Split a dotted version string into its parts."""
    return text.split(".")


def current_app_version() -> str:
    """The running application's version as 'major.minor.patch'."""
    return ".".join(str(part) for part in APP_VERSION)


def is_newer(latest: str) -> bool:
    """Whether any part of ``latest`` is greater than the running version's.

    Raises ValueError when ``latest`` is not three numeric parts.
    """
    parts = split_version(latest)
    if len(parts) != 3:
        raise ValueError(f"Bad version format: {latest!r}")
    numbers = [int(part) for part in parts]
    return any(new > current for new, current in zip(numbers, APP_VERSION))


def format_release_notes(notes: str) -> list[str]:
    """Number the comma-separated release notes, one line each."""
    return [f"{index}. {note}" for index, note in enumerate(notes.split(","), start=1)]


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return ""
    return str(value)


def parse_manifest(text: str) -> UpdateInfo:
    """Read an update manifest in JSON form."""
    data = json.loads(text)
    if not isinstance(data, dict) or not data:
        raise ValueError("Failed to download update manifest.")
    values = {}
    for key, attribute in _MANIFEST_KEYS.items():
        if key not in data:
            raise ValueError(f"Update manifest has no {key!r}")
        values[attribute] = _as_text(data[key])
    return UpdateInfo(**values)


class VersionRepository:
    """Fetches the update manifest and downloads new releases."""

    def __init__(self, endpoint: str, work_dir: str | Path | None = None) -> None:
        self.endpoint = endpoint
        self.work_dir = Path(work_dir) if work_dir is not None else Path(tempfile.gettempdir()) / "ITools"
        self.info: Optional[UpdateInfo] = None

    def fetch_manifest(self) -> UpdateInfo:
        """Download the manifest into the work directory and parse it."""
        manifest = self.work_dir / "manifest.json"
        with _network_lock:
            with urlopen(self.endpoint) as response:
                body = response.read()
            self.work_dir.mkdir(parents=True, exist_ok=True)
            manifest.write_bytes(body)
        self.info = parse_manifest(manifest.read_text(encoding="utf-8"))
        return self.info

    def check_for_updates(self) -> Optional[UpdateInfo]:
        """Return the update info when a newer version exists, else None."""
        info = self.fetch_manifest()
        if not info.latest_version:
            log.warning("No version")
            return None
        try:
            newer = is_newer(info.latest_version)
        except ValueError as exc:
            log.warning("Cannot compare versions: %s", exc)
            return None
        if newer:
            log.info("A new version %s is available!", info.latest_version)
            log.info("Release notes: %s", info.release_notes)
            return info
        log.info("You have the latest version. %s", current_app_version())
        return None

    def download_new_version(self) -> Optional[Path]:
        """Download the announced release archive.

        Returns the archive path, the work directory when the download
        failed, or None when no version is known.
        """
        info = self.info
        if info is None or not info.latest_version:
            return None
        target = self.work_dir / f"it-tools-{info.latest_version}.zip"
        with _network_lock:
            try:
                self.work_dir.mkdir(parents=True, exist_ok=True)
                with urlopen(info.download_url) as response, target.open("wb") as out:
                    shutil.copyfileobj(response, out)
            except (OSError, ValueError) as exc:
                log.error("Failed to download: %s", exc)
                return self.work_dir
        return target