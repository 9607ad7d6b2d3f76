import os
from os.path import exists, join

import pytest

from setupkit.disk.vfs import LocalDiskVFS, MemoryVFS


def test_memory_vfs():
    vfs = MemoryVFS()

    assert vfs.list() == []

    vfs.save("test.txt", "hello world")
    assert vfs.read("test.txt") == "hello world"
    assert vfs.list() == ["test.txt"]

    vfs.save("subdir/another.txt", "hello world")
    assert vfs.read("subdir/another.txt") == "hello world"
    assert vfs.list() == ["subdir/another.txt", "test.txt"]

    assert vfs.list("subdir") == ["subdir/another.txt"]
    assert vfs.list("subdir/") == ["subdir/another.txt"]
    assert vfs.list("nonexistent") == []

    assert vfs.exists("test.txt")
    assert vfs.exists("subdir")
    assert not vfs.exists("nonexistent")

    with pytest.raises(ValueError):
        vfs.read("nonexistent.txt")


def test_memory_vfs_modes():
    vfs = MemoryVFS()

    vfs.save("script.sh", "echo hi\n", mode=0o755)
    vfs.save("plain.txt", "hi\n")

    assert vfs.get_mode("script.sh") == 0o755
    assert vfs.get_mode("plain.txt") == 0o644

    with pytest.raises(ValueError):
        vfs.get_mode("nonexistent")


def test_memory_vfs_remove_tree():
    vfs = MemoryVFS()
    vfs.save("node_modules/a/index.js", "")
    vfs.save("node_modules/b/index.js", "")
    vfs.save("package.json", "{}")

    assert vfs.remove_tree("node_modules") is True
    assert vfs.list() == ["package.json"]
    assert vfs.remove_tree("node_modules") is False


def test_local_disk_vfs(tmp_path):
    vfs = LocalDiskVFS(str(tmp_path))

    assert vfs.list() == []

    vfs.save("test.txt", "hello world")
    assert vfs.read("test.txt") == "hello world"
    assert vfs.list() == ["test.txt"]

    vfs.save("subdir/another.txt", "hello world")
    assert vfs.read("subdir/another.txt") == "hello world"
    assert vfs.list() == ["subdir/another.txt", "test.txt"]

    assert vfs.list("subdir") == ["subdir/another.txt"]
    assert vfs.list("subdir/") == ["subdir/another.txt"]
    assert vfs.list("nonexistent") == []

    assert vfs.exists("subdir")
    assert vfs.get_full_path("test.txt") == join(tmp_path, "test.txt")

    with pytest.raises(ValueError):
        vfs.read("nonexistent.txt")


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_local_disk_vfs_modes(tmp_path):
    vfs = LocalDiskVFS(str(tmp_path))

    vfs.save(".husky/pre-commit", "npx lint-staged\n", mode=0o755)

    assert vfs.get_mode(".husky/pre-commit") == 0o755
    assert os.access(join(tmp_path, ".husky", "pre-commit"), os.X_OK)


def test_local_disk_vfs_remove_tree(tmp_path):
    vfs = LocalDiskVFS(str(tmp_path))
    vfs.save("node_modules/react/index.js", "")
    vfs.save("package.json", "{}")

    assert vfs.remove_tree("node_modules") is True
    assert not exists(join(tmp_path, "node_modules"))
    assert vfs.list() == ["package.json"]

    assert vfs.remove_tree("node_modules") is False


def test_local_disk_vfs_root(tmp_path):
    root = join(tmp_path, "my-app")

    with pytest.raises(ValueError):
        LocalDiskVFS(root, create=False)

    LocalDiskVFS(root)
    assert exists(root)

    with pytest.raises(FileExistsError):
        LocalDiskVFS(root, allow_existing=False)
