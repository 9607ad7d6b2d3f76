import pytest

from setupkit.plan.package_managers import PACKAGE_MANAGERS, get_package_manager
from setupkit.wizard.answers import PackageManagerName


def test_all_package_managers_registered():
    assert set(PACKAGE_MANAGERS) == {pm.value for pm in PackageManagerName}


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pnpm", ["pnpm", "create", "vite", "my-app", "--template", "react-ts"]),
        ("yarn", ["yarn", "create", "vite", "my-app", "--template", "react-ts"]),
        ("bun", ["bun", "create", "vite", "my-app", "--template", "react-ts"]),
        ("npm", ["npm", "create", "vite", "my-app", "--", "--template", "react-ts"]),
        ("deno", ["deno", "run", "-A", "npm:create-vite", "my-app", "--template", "react-ts"]),
    ],
)
def test_create_vite(name, expected):
    assert get_package_manager(name).create_vite("my-app", "react-ts") == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pnpm", ["pnpm", "add", "-D", "husky"]),
        ("yarn", ["yarn", "add", "-D", "husky"]),
        ("bun", ["bun", "add", "-D", "husky"]),
        ("npm", ["npm", "add", "-D", "husky"]),
        ("deno", ["deno", "add", "--dev", "npm:husky"]),
    ],
)
def test_add_dev(name, expected):
    assert get_package_manager(name).add(["husky"], dev=True) == expected


def test_add():
    pm = get_package_manager("pnpm")

    assert pm.add(["tailwindcss", "@tailwindcss/vite"]) == ["pnpm", "add", "tailwindcss", "@tailwindcss/vite"]


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pnpm", ["pnpm", "remove", "globals"]),
        ("npm", ["npm", "uninstall", "globals"]),
        ("deno", ["deno", "remove", "npm:globals"]),
    ],
)
def test_remove(name, expected):
    assert get_package_manager(name).remove(["globals"]) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pnpm", ["pnpm", "exec", "husky", "init"]),
        ("npm", ["npm", "exec", "husky", "init"]),
        ("yarn", ["yarn", "husky", "init"]),
        ("bun", ["bun", "x", "husky", "init"]),
        ("deno", ["deno", "run", "-A", "npm:husky", "init"]),
    ],
)
def test_exec(name, expected):
    assert get_package_manager(name).exec("husky", "init") == expected


@pytest.mark.parametrize(
    ("name", "install", "dev"),
    [
        ("pnpm", ["pnpm", "install"], ["pnpm", "run", "dev"]),
        ("npm", ["npm", "install"], ["npm", "run", "dev"]),
        ("deno", ["deno", "install"], ["deno", "task", "dev"]),
    ],
)
def test_follow_up_commands(name, install, dev):
    pm = get_package_manager(name)

    assert pm.install() == install
    assert pm.run("dev") == dev


def test_unknown_package_manager():
    with pytest.raises(ValueError):
        get_package_manager("cargo")
