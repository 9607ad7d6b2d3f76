from typing import NamedTuple, Optional

from setupkit.log import get_logger
from setupkit.plan.package_managers import PackageManager, get_package_manager
from setupkit.plan.steps import MergeManifest, RunCommand, Task, WriteFile
from setupkit.templates.registry import PROJECT_FILES, TemplateName
from setupkit.wizard.answers import (
    Answers,
    Extra,
    Forms,
    Framework,
    Icons,
    Query,
    Routing,
    StateManagement,
    Styling,
)

log = get_logger(__name__)

VITE_TEMPLATES = {
    Framework.VITE_REACT_TS: "react-ts",
    Framework.VUE_TS: "vue-ts",
}

ESLINT_PRETTIER_PACKAGES = [
    "eslint",
    "eslint-config-prettier",
    "eslint-import-resolver-typescript",
    "eslint-plugin-import",
    "eslint-plugin-jsx-a11y",
    "eslint-plugin-prettier",
    "eslint-plugin-react",
    "eslint-plugin-react-hooks",
    "eslint-plugin-react-refresh",
    "@eslint/js",
    "prettier",
    "typescript-eslint",
    "@typescript-eslint/eslint-plugin",
    "@typescript-eslint/parser",
]
# Shipped only by the react-ts starter; removing a missing dependency fails
INCOMPATIBLE_LINT_PACKAGES = {
    Framework.VITE_REACT_TS: ["globals"],
}

LINT_SCRIPTS = {
    "lint": "eslint . --ext .ts,.tsx",
    "format": "prettier --write .",
}
LINT_STAGED_CONFIG = {
    "*/**/*.{ts,tsx}": ["eslint --fix", "prettier --write"],
}


class Library(NamedTuple):
    """A library installed for a single (or exclusive) choice."""

    title: str
    packages: list[str]
    dev: bool = False


# Checked in this order; each question is a single value, so at most one
# library per question is installed.
# Formik is a runtime dependency, so it is added without the dev flag.
LIBRARIES = [
    ("routing", Routing.REACT_ROUTER, Library("React Router", ["react-router"])),
    ("query", Query.AXIOS, Library("Axios", ["axios"])),
    ("query", Query.SWR, Library("SWR", ["swr"])),
    ("query", Query.REACT_QUERY, Library("React Query", ["@tanstack/react-query"])),
    ("forms", Forms.REACT_HOOK_FORM, Library("React Hook Form", ["react-hook-form"])),
    ("forms", Forms.FORMIK, Library("Formik", ["formik"])),
    ("state_management", StateManagement.ZUSTAND, Library("Zustand", ["zustand"])),
    ("styling", Styling.TAILWINDCSS, Library("Tailwind CSS", ["tailwindcss", "@tailwindcss/vite"])),
    ("styling", Styling.SASS, Library("SASS", ["sass"])),
    ("icons", Icons.LUCIDE_ICONS, Library("Lucide Icons", ["lucide-react"])),
]


def _write_template(name: TemplateName, framework: Framework) -> WriteFile:
    project_file = PROJECT_FILES[name]
    return WriteFile(
        path=project_file.target,
        template=name,
        context={"framework": framework.value},
        mode=project_file.mode,
    )


def framework_task(answers: Answers, project_name: str, pm: PackageManager) -> Task:
    return Task(
        name="framework",
        title=f"Creating {project_name} from the {VITE_TEMPLATES[answers.framework]} template...",
        success_message="Project created.",
        failure_message="Error creating project.",
        actions=[
            RunCommand(
                args=pm.create_vite(project_name, VITE_TEMPLATES[answers.framework]),
                in_project=False,
            )
        ],
        required=True,
    )


def library_tasks(answers: Answers, pm: PackageManager) -> list[Task]:
    tasks = []
    for field, value, library in LIBRARIES:
        if getattr(answers, field) != value:
            continue
        tasks.append(
            Task(
                name=value.value,
                title=f"Installing {library.title}...",
                success_message=f"{library.title} installed.",
                failure_message=f"Error installing {library.title}.",
                actions=[RunCommand(args=pm.add(library.packages, dev=library.dev))],
            )
        )
    return tasks


def eslint_prettier_task(answers: Answers, pm: PackageManager) -> Task:
    actions = [RunCommand(args=pm.add(ESLINT_PRETTIER_PACKAGES, dev=True))]
    incompatible = INCOMPATIBLE_LINT_PACKAGES.get(answers.framework)
    if incompatible:
        actions.append(RunCommand(args=pm.remove(incompatible)))
    actions += [
        _write_template(TemplateName.ESLINT_CONFIG, answers.framework),
        _write_template(TemplateName.PRETTIER_CONFIG, answers.framework),
        _write_template(TemplateName.PRETTIER_IGNORE, answers.framework),
        MergeManifest(updates={"scripts": dict(LINT_SCRIPTS)}),
    ]

    return Task(
        name=Extra.ESLINT_PRETTIER.value,
        title="Setting up ESLint and Prettier...",
        success_message="Prettier and ESLint configured.",
        failure_message="Error setting up ESLint and Prettier.",
        actions=actions,
    )


def husky_lint_staged_task(answers: Answers, pm: PackageManager) -> Task:
    return Task(
        name=Extra.HUSKY_LINT_STAGED.value,
        title="Setting up Husky and lint-staged...",
        success_message="Husky and lint-staged configured.",
        failure_message="Error setting up Husky and lint-staged.",
        actions=[
            RunCommand(args=pm.add(["husky"], dev=True)),
            RunCommand(args=pm.exec("husky", "init")),
            RunCommand(args=pm.add(["lint-staged"], dev=True)),
            _write_template(TemplateName.HUSKY_PRE_COMMIT, answers.framework),
            MergeManifest(updates={"lint-staged": dict(LINT_STAGED_CONFIG)}),
        ],
    )


def vite_aliases_task(answers: Answers, pm: PackageManager) -> Task:
    return Task(
        name=Extra.VITE_ALIASES.value,
        title="Setting up Vite aliases...",
        success_message="Vite aliases configured.",
        failure_message="Error setting up Vite aliases.",
        actions=[
            RunCommand(args=pm.add(["vite-tsconfig-paths"], dev=True)),
            _write_template(TemplateName.VITE_CONFIG, answers.framework),
            _write_template(TemplateName.TSCONFIG_APP, answers.framework),
        ],
    )


def clsx_task(answers: Answers, pm: PackageManager) -> Task:
    # Runtime dependency: clsx is imported by application code
    return Task(
        name=Extra.CLSX.value,
        title="Installing CLSX...",
        success_message="CLSX installed.",
        failure_message="Error installing CLSX.",
        actions=[RunCommand(args=pm.add(["clsx"]))],
    )


EXTRA_TASKS = [
    (Extra.ESLINT_PRETTIER, eslint_prettier_task),
    (Extra.HUSKY_LINT_STAGED, husky_lint_staged_task),
    (Extra.VITE_ALIASES, vite_aliases_task),
    (Extra.CLSX, clsx_task),
]


def plan_installation(
    answers: Answers,
    project_name: str,
    package_manager: Optional[PackageManager] = None,
) -> list[Task]:
    """
    Derive the ordered list of installation tasks from the user's answers.

    Order: project creation, single-choice libraries (routing, data
    fetching, forms, state management, styling, icons), then each selected
    extra. The function has no side effects.

    :param answers: Complete answer record.
    :param project_name: Name of the project directory to create.
    :param package_manager: Package manager vocabulary (defaults to the selected one).
    :return: Tasks to execute, in order.
    """
    pm = package_manager or get_package_manager(answers.package_manager.value)

    tasks = [framework_task(answers, project_name, pm)]
    tasks += library_tasks(answers, pm)
    for extra, build_task in EXTRA_TASKS:
        if answers.has_extra(extra):
            tasks.append(build_task(answers, pm))

    log.debug(f"Planned {len(tasks)} tasks: {', '.join(task.name for task in tasks)}")
    return tasks


__all__ = ["plan_installation"]
