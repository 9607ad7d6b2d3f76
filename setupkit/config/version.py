import re
from importlib.metadata import PackageNotFoundError, version
from os.path import abspath, basename, dirname, isdir, isfile, join
from typing import Optional

DISTRIBUTION_NAME = "cli-frameworks-setup"
SOURCE_ROOT = abspath(join(dirname(__file__), "..", ".."))
GIT_DIR_PATH = join(SOURCE_ROOT, ".git")
SETUP_VERSION_PATTERN = re.compile(r'^\s*VERSION\s*=\s*"(.*)"\s*(#.*)?$')
UNKNOWN_VERSION = "0.0.0"


def _read_line(path: str) -> Optional[str]:
    if not isfile(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return f.readline().strip()


def get_git_commit() -> Optional[str]:
    """
    Return the current git commit (if running from a source checkout).

    :return: commit hash, branch name for a dangling reference, or None
    """
    if not isdir(GIT_DIR_PATH):
        return None

    head = _read_line(join(GIT_DIR_PATH, "HEAD"))
    if not head or not head.startswith("ref: "):
        return head

    ref = head[5:]
    return _read_line(join(GIT_DIR_PATH, ref)) or basename(ref)


def get_package_version() -> str:
    """
    Get the package version.

    Uses the installed distribution metadata, falling back to the
    `VERSION` constant in setup.py when running from a source checkout.

    :return: package version, or "0.0.0" if it can't be determined
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pass

    setup_path = join(SOURCE_ROOT, "setup.py")
    if not isfile(setup_path):
        return UNKNOWN_VERSION

    with open(setup_path, "r", encoding="utf-8") as fp:
        for line in fp:
            m = SETUP_VERSION_PATTERN.match(line)
            if m:
                return m.group(1)

    return UNKNOWN_VERSION


def get_version() -> str:
    """
    Return the version shown by `--version`.

    Example: 1.0.0-gitbf01c19

    :return: package version, with the git commit appended if available
    """
    package_version = get_package_version()
    commit = get_git_commit()
    if commit:
        return f"{package_version}-git{commit[:7]}"
    return package_version


__all__ = ["get_version"]
