import json
from typing import Any

from setupkit.disk.vfs import VirtualFileSystem
from setupkit.log import get_logger

log = get_logger(__name__)

MANIFEST_FILE = "package.json"


def merge_manifest(file_system: VirtualFileSystem, updates: dict[str, Any]) -> dict[str, Any]:
    """
    Merge keys into the project's package.json.

    Top-level keys whose existing and new values are both objects are
    merged one level deep (new entries win); everything else is replaced.

    :param file_system: File system rooted at the project directory.
    :param updates: Keys to merge.
    :return: The updated manifest.
    """
    manifest = json.loads(file_system.read(MANIFEST_FILE))

    for key, value in updates.items():
        current = manifest.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            manifest[key] = {**current, **value}
        else:
            manifest[key] = value

    file_system.save(MANIFEST_FILE, json.dumps(manifest, indent=2, ensure_ascii=False) + "\n")
    log.debug(f"Updated {MANIFEST_FILE} keys: {', '.join(updates)}")
    return manifest


__all__ = ["MANIFEST_FILE", "merge_manifest"]
