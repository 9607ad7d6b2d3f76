import os
import os.path
import shutil
from pathlib import Path
from typing import Optional

from setupkit.log import get_logger

log = get_logger(__name__)


class VirtualFileSystem:
    def save(self, path: str, content: str, mode: Optional[int] = None):
        """
        Save content to a file. Use for both new and updated files.

        :param path: Path to the file, relative to project root.
        :param content: Content to save.
        :param mode: Permission bits to set on the file (optional).
        """
        raise NotImplementedError()

    def read(self, path: str) -> str:
        """
        Read file contents.

        :param path: Path to the file, relative to project root.
        :return: File contents.
        """
        raise NotImplementedError()

    def exists(self, path: str) -> bool:
        """
        Check whether a file or directory exists.

        :param path: Path relative to project root.
        """
        raise NotImplementedError()

    def get_mode(self, path: str) -> int:
        """
        Get permission bits of a file.

        :param path: Path to the file, relative to project root.
        :return: Permission bits (eg. 0o644).
        """
        raise NotImplementedError()

    def remove_tree(self, path: str) -> bool:
        """
        Recursively remove a directory (or a single file).

        :param path: Path relative to project root.
        :return: True if anything was removed, False if the path didn't exist.
        """
        raise NotImplementedError()

    def get_full_path(self, path: str) -> str:
        """
        Get the full path to a file.

        :param path: Path to the file, relative to project root.
        :return: Full path to the file.
        """
        raise NotImplementedError()

    def _filter_by_prefix(self, file_list: list[str], prefix: str) -> list[str]:
        # We use "/" internally on all platforms, including win32
        if not prefix.endswith("/"):
            prefix = prefix + "/"
        return [f for f in file_list if f.startswith(prefix)]

    def _get_file_list(self) -> list[str]:
        raise NotImplementedError()

    def list(self, prefix: str = None) -> list[str]:
        """
        Return a list of files in the project.

        File paths are relative to the project root.

        :param prefix: Optional prefix to filter files for.
        :return: List of file paths.
        """
        retval = sorted(self._get_file_list())
        if prefix:
            retval = self._filter_by_prefix(retval, prefix)
        return retval


class MemoryVFS(VirtualFileSystem):
    files: dict[str, str]
    modes: dict[str, int]

    DEFAULT_MODE = 0o644

    def __init__(self):
        self.files = {}
        self.modes = {}

    def save(self, path: str, content: str, mode: Optional[int] = None):
        self.files[path] = content
        if mode is not None:
            self.modes[path] = mode

    def read(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise ValueError(f"File not found: {path}")

    def exists(self, path: str) -> bool:
        return path in self.files or bool(self._filter_by_prefix(list(self.files), path))

    def get_mode(self, path: str) -> int:
        if path not in self.files:
            raise ValueError(f"File not found: {path}")
        return self.modes.get(path, self.DEFAULT_MODE)

    def remove_tree(self, path: str) -> bool:
        doomed = self._filter_by_prefix(list(self.files), path)
        if path in self.files:
            doomed.append(path)
        for file_path in doomed:
            del self.files[file_path]
            self.modes.pop(file_path, None)
        return bool(doomed)

    def get_full_path(self, path: str) -> str:
        # We use "/" internally on all platforms, including win32
        return "/" + path

    def _get_file_list(self) -> list[str]:
        return self.files.keys()


class LocalDiskVFS(VirtualFileSystem):
    def __init__(
        self,
        root: str,
        create: bool = True,
        allow_existing: bool = True,
    ):
        if not os.path.isdir(root):
            if create:
                os.makedirs(root)
            else:
                raise ValueError(f"Root directory does not exist: {root}")
        else:
            if not allow_existing:
                raise FileExistsError(f"Root directory already exists: {root}")

        self.root = root

    def get_full_path(self, path: str) -> str:
        return os.path.abspath(os.path.normpath(os.path.join(self.root, path)))

    def save(self, path: str, content: str, mode: Optional[int] = None):
        full_path = self.get_full_path(path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(content)
        if mode is not None:
            os.chmod(full_path, mode)
        log.debug(f"Saved file {path} ({len(content)} bytes) to {full_path}")

    def read(self, path: str) -> str:
        full_path = self.get_full_path(path)
        if not os.path.isfile(full_path):
            raise ValueError(f"File not found: {path}")

        with open(full_path, "r", encoding="utf-8") as f:
            return f.read()

    def exists(self, path: str) -> bool:
        return os.path.exists(self.get_full_path(path))

    def get_mode(self, path: str) -> int:
        full_path = self.get_full_path(path)
        if not os.path.isfile(full_path):
            raise ValueError(f"File not found: {path}")
        return os.stat(full_path).st_mode & 0o777

    def remove_tree(self, path: str) -> bool:
        full_path = self.get_full_path(path)
        if os.path.isdir(full_path):
            shutil.rmtree(full_path)
        elif os.path.isfile(full_path):
            os.remove(full_path)
        else:
            return False
        log.debug(f"Removed {path} from {full_path}")
        return True

    def _get_file_list(self) -> list[str]:
        files = []
        for dpath, dirnames, filenames in os.walk(self.root):
            for filename in filenames:
                path = os.path.relpath(os.path.join(dpath, filename), self.root)
                # We use "/" internally on all platforms, including win32
                files.append(Path(path).as_posix())

        return files


__all__ = ["VirtualFileSystem", "MemoryVFS", "LocalDiskVFS"]
