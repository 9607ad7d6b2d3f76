import pytest

from setupkit.plan.package_managers import get_package_manager
from setupkit.plan.planner import (
    ESLINT_PRETTIER_PACKAGES,
    LINT_SCRIPTS,
    LINT_STAGED_CONFIG,
    plan_installation,
)
from setupkit.plan.steps import MergeManifest, WriteFile
from setupkit.templates.registry import TemplateName


def test_minimal_plan(make_answers):
    tasks = plan_installation(make_answers(), "my-app")

    assert len(tasks) == 1
    task = tasks[0]
    assert task.required is True
    assert task.commands == [["pnpm", "create", "vite", "my-app", "--template", "react-ts"]]
    assert task.actions[0].in_project is False


def test_vue_template(make_answers):
    tasks = plan_installation(make_answers(framework="vue-ts", packageManager="npm"), "my-app")

    assert tasks[0].commands == [["npm", "create", "vite", "my-app", "--", "--template", "vue-ts"]]


def test_full_plan_order(make_answers):
    answers = make_answers(
        routing="react-router",
        query="react-query",
        forms="formik",
        stateManagement="zustand",
        styling="tailwindcss",
        icons="lucide-icons",
        extras=["clsx", "vite-aliases", "husky-lint-staged", "eslint-prettier"],
    )

    tasks = plan_installation(answers, "my-app")

    assert [task.name for task in tasks] == [
        "framework",
        "react-router",
        "react-query",
        "formik",
        "zustand",
        "tailwindcss",
        "lucide-icons",
        "eslint-prettier",
        "husky-lint-staged",
        "vite-aliases",
        "clsx",
    ]
    assert all(not task.required for task in tasks[1:])


@pytest.mark.parametrize(
    ("answer", "value", "command"),
    [
        ("routing", "react-router", ["pnpm", "add", "react-router"]),
        ("query", "axios", ["pnpm", "add", "axios"]),
        ("query", "swr", ["pnpm", "add", "swr"]),
        ("query", "react-query", ["pnpm", "add", "@tanstack/react-query"]),
        ("forms", "react-hook-form", ["pnpm", "add", "react-hook-form"]),
        ("forms", "formik", ["pnpm", "add", "formik"]),
        ("stateManagement", "zustand", ["pnpm", "add", "zustand"]),
        ("styling", "tailwindcss", ["pnpm", "add", "tailwindcss", "@tailwindcss/vite"]),
        ("styling", "sass", ["pnpm", "add", "sass"]),
        ("icons", "lucide-icons", ["pnpm", "add", "lucide-react"]),
    ],
)
def test_library_commands(make_answers, answer, value, command):
    tasks = plan_installation(make_answers(**{answer: value}), "my-app")

    assert len(tasks) == 2
    assert tasks[1].commands == [command]
    assert tasks[1].actions[0].in_project is True


def test_eslint_prettier(make_answers):
    tasks = plan_installation(make_answers(extras=["eslint-prettier"]), "my-app")
    task = tasks[1]

    assert task.commands == [
        ["pnpm", "add", "-D", *ESLINT_PRETTIER_PACKAGES],
        ["pnpm", "remove", "globals"],
    ]
    writes = [action for action in task.actions if isinstance(action, WriteFile)]
    assert [(w.template, w.path) for w in writes] == [
        (TemplateName.ESLINT_CONFIG, "eslint.config.js"),
        (TemplateName.PRETTIER_CONFIG, ".prettierrc"),
        (TemplateName.PRETTIER_IGNORE, ".prettierignore"),
    ]
    merge = task.actions[-1]
    assert isinstance(merge, MergeManifest)
    assert merge.updates == {"scripts": LINT_SCRIPTS}
    assert LINT_SCRIPTS == {"lint": "eslint . --ext .ts,.tsx", "format": "prettier --write ."}


def test_husky_lint_staged(make_answers):
    tasks = plan_installation(make_answers(packageManager="bun", extras=["husky-lint-staged"]), "my-app")
    task = tasks[1]

    assert task.commands == [
        ["bun", "add", "-D", "husky"],
        ["bun", "x", "husky", "init"],
        ["bun", "add", "-D", "lint-staged"],
    ]
    hook = task.actions[3]
    assert isinstance(hook, WriteFile)
    assert hook.path == ".husky/pre-commit"
    assert hook.mode == 0o755
    assert task.actions[4].updates == {"lint-staged": LINT_STAGED_CONFIG}
    assert LINT_STAGED_CONFIG == {"*/**/*.{ts,tsx}": ["eslint --fix", "prettier --write"]}


def test_vite_aliases(make_answers):
    tasks = plan_installation(make_answers(framework="vue-ts", extras=["vite-aliases"]), "my-app")
    task = tasks[1]

    assert task.commands == [["pnpm", "add", "-D", "vite-tsconfig-paths"]]
    writes = task.actions[1:]
    assert [w.path for w in writes] == ["vite.config.ts", "tsconfig.app.json"]
    assert all(w.context == {"framework": "vue-ts"} for w in writes)


def test_clsx_is_a_runtime_dependency(make_answers):
    tasks = plan_installation(make_answers(extras=["clsx"]), "my-app")

    assert tasks[1].commands == [["pnpm", "add", "clsx"]]


def test_explicit_package_manager(make_answers):
    tasks = plan_installation(make_answers(query="axios"), "my-app", get_package_manager("deno"))

    assert tasks[0].commands == [["deno", "run", "-A", "npm:create-vite", "my-app", "--template", "react-ts"]]
    assert tasks[1].commands == [["deno", "add", "npm:axios"]]


def test_plan_has_no_side_effects(make_answers, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    plan_installation(make_answers(extras=["eslint-prettier", "husky-lint-staged"]), "my-app")

    assert list(tmp_path.iterdir()) == []


def test_eslint_prettier_vue_keeps_dependencies(make_answers):
    tasks = plan_installation(make_answers(framework="vue-ts", extras=["eslint-prettier"]), "my-app")
    task = tasks[1]

    assert task.commands == [["pnpm", "add", "-D", *ESLINT_PRETTIER_PACKAGES]]
    writes = [action.path for action in task.actions if isinstance(action, WriteFile)]
    assert writes == ["eslint.config.js", ".prettierrc", ".prettierignore"]
    assert isinstance(task.actions[-1], MergeManifest)
