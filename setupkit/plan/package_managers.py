"""
Command-line vocabulary of the supported package managers.

Each package manager class turns abstract operations (create a project,
add or remove dependencies, run a package binary or a project script)
into the argument list the real tool expects. Nothing is executed here.
"""

from typing import Sequence

from setupkit.wizard.answers import PackageManagerName


class PackageManager:
    """
    Base package manager; the defaults match pnpm.
    """

    name: str
    add_command = "add"
    remove_command = "remove"
    dev_flag = "-D"
    exec_prefix: Sequence[str] = ("exec",)
    run_command = "run"

    def create_vite(self, project_name: str, template: str) -> list[str]:
        return [self.name, "create", "vite", project_name, "--template", template]

    def package_spec(self, package: str) -> str:
        return package

    def add(self, packages: Sequence[str], dev: bool = False) -> list[str]:
        args = [self.name, self.add_command]
        if dev:
            args.append(self.dev_flag)
        return args + [self.package_spec(p) for p in packages]

    def remove(self, packages: Sequence[str]) -> list[str]:
        return [self.name, self.remove_command] + [self.package_spec(p) for p in packages]

    def exec(self, binary: str, *args: str) -> list[str]:
        return [self.name, *self.exec_prefix, binary, *args]

    def install(self) -> list[str]:
        return [self.name, "install"]

    def run(self, script: str) -> list[str]:
        return [self.name, self.run_command, script]


class Npm(PackageManager):
    name = PackageManagerName.NPM.value
    remove_command = "uninstall"

    def create_vite(self, project_name: str, template: str) -> list[str]:
        # npm create forwards options to the initializer only after "--"
        return [self.name, "create", "vite", project_name, "--", "--template", template]


class Yarn(PackageManager):
    name = PackageManagerName.YARN.value
    exec_prefix = ()


class Pnpm(PackageManager):
    name = PackageManagerName.PNPM.value


class Bun(PackageManager):
    name = PackageManagerName.BUN.value
    exec_prefix = ("x",)


class Deno(PackageManager):
    name = PackageManagerName.DENO.value
    dev_flag = "--dev"
    run_command = "task"

    def create_vite(self, project_name: str, template: str) -> list[str]:
        return [self.name, "run", "-A", "npm:create-vite", project_name, "--template", template]

    def package_spec(self, package: str) -> str:
        return f"npm:{package}"

    def exec(self, binary: str, *args: str) -> list[str]:
        return [self.name, "run", "-A", f"npm:{binary}", *args]


PACKAGE_MANAGERS = {
    Npm.name: Npm,
    Yarn.name: Yarn,
    Pnpm.name: Pnpm,
    Bun.name: Bun,
    Deno.name: Deno,
}


def get_package_manager(name: str) -> PackageManager:
    """
    Get the package manager for a name.

    :param name: Package manager name (eg. "pnpm").
    :return: Package manager instance.
    """
    try:
        return PACKAGE_MANAGERS[PackageManagerName(name).value]()
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported package manager: {name}")


__all__ = ["PackageManager", "PACKAGE_MANAGERS", "get_package_manager"]
