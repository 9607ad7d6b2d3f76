import time
from datetime import datetime, timezone
from os.path import abspath, exists, join
from typing import Optional

from setupkit.disk.manifest import merge_manifest
from setupkit.disk.vfs import LocalDiskVFS, VirtualFileSystem
from setupkit.executor.report import ExecutionReport, TaskResult
from setupkit.log import get_logger
from setupkit.plan.package_managers import PackageManager
from setupkit.plan.steps import Action, MergeManifest, RunCommand, Task, WriteFile
from setupkit.proc.exec_log import ExecLog
from setupkit.proc.process_manager import MAX_COMMAND_TIMEOUT, CommandError, ProcessManager
from setupkit.templates.registry import TemplateStore
from setupkit.ui.base import MessageType, UIBase
from setupkit.wizard.answers import Extra

log = get_logger(__name__)

DEPENDENCY_DIR = "node_modules"


class ProjectExistsError(Exception):
    """The target project directory already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory {path} already exists")


def check_project_dir(workspace: str, project_name: str) -> str:
    """
    Make sure the project directory doesn't exist yet.

    :param workspace: Directory in which the project is created.
    :param project_name: Name of the project directory.
    :return: Absolute path of the project directory.
    :raises ProjectExistsError: If the project directory already exists.
    """
    project_root = join(abspath(workspace), project_name)
    if exists(project_root):
        raise ProjectExistsError(project_root)
    return project_root


class StepExecutor:
    """
    Execute planned tasks against a new project directory.

    Tasks run strictly one after another. Each task is its own failure
    boundary: an error is reported and execution continues with the next
    task. Only a failed `required` task (project creation) stops the run.

    The project root is explicit: package manager commands run with the
    project directory as their working directory, and files are written
    through a file system rooted there. The process working directory is
    never changed.
    """

    def __init__(
        self,
        ui: UIBase,
        project_name: str,
        package_manager: PackageManager,
        *,
        workspace: str,
        timeout: float = MAX_COMMAND_TIMEOUT,
        process_manager: Optional[ProcessManager] = None,
        file_system: Optional[VirtualFileSystem] = None,
        templates: Optional[TemplateStore] = None,
    ):
        """
        Create a new step executor.

        :param ui: User interface to report progress to.
        :param project_name: Name of the project directory to create.
        :param package_manager: Package manager used to run the commands.
        :param workspace: Directory in which the project is created.
        :param timeout: Timeout for each package manager command, in seconds.
        :param process_manager: Process manager (defaults to one rooted at the workspace).
        :param file_system: Project file system (defaults to the project directory on disk,
            opened once it has been created).
        :param templates: Template store for generated config files.
        """
        self.ui = ui
        self.project_name = project_name
        self.package_manager = package_manager
        self.workspace = abspath(workspace)
        self.project_root = join(self.workspace, project_name)
        self.process_manager = process_manager or ProcessManager(
            root_dir=self.workspace,
            output_handler=self.output_handler,
            timeout=timeout,
        )
        self._file_system = file_system
        self.templates = templates or TemplateStore()

    @property
    def file_system(self) -> VirtualFileSystem:
        if self._file_system is None:
            self._file_system = LocalDiskVFS(self.project_root, create=False)
        return self._file_system

    def check_preconditions(self):
        """
        Make sure the project can be created.

        :raises ProjectExistsError: If the project directory already exists.
        """
        check_project_dir(self.workspace, self.project_name)

    async def output_handler(self, out: str, err: str):
        await self.ui.send_output(out, err)

    async def run(self, tasks: list[Task]) -> ExecutionReport:
        """
        Execute the tasks in order, then clean up and print next steps.

        :param tasks: Tasks to execute.
        :return: Report with the result of every executed task.
        :raises ProjectExistsError: If the project directory already exists
            (no task is executed in that case).
        """
        self.check_preconditions()

        report = ExecutionReport()
        for task in tasks:
            result = await self.run_task(task)
            report.add(result)
            if task.required and not result.success:
                log.warning(f"Required task '{task.name}' failed, stopping")
                report.aborted = True
                return report

        await self.ui.send_message("\nProject initialized.", type=MessageType.SUCCESS)
        await self.remove_dependencies()
        await self.send_follow_up(report)
        return report

    async def run_task(self, task: Task) -> TaskResult:
        """
        Run all actions of a single task.

        The first failing action stops the task. The error is reported to
        the user and returned in the result, never raised.
        """
        log.info(f"Running task {task.name} ({len(task.actions)} actions)")
        t0 = time.time()
        commands: list[ExecLog] = []

        await self.ui.start_task(task.title)
        try:
            for action in task.actions:
                await self.run_action(action, commands)
        except Exception as err:
            log.error(f"Task {task.name} failed: {err}")
            log.debug(f"Task {task.name} traceback", exc_info=True)
            await self.ui.finish_task(False, task.failure_message, str(err))
            return TaskResult(
                name=task.name,
                success=False,
                message=task.failure_message,
                error=str(err),
                duration=time.time() - t0,
                commands=commands,
            )

        await self.ui.finish_task(True, task.success_message)
        return TaskResult(
            name=task.name,
            success=True,
            message=task.success_message,
            duration=time.time() - t0,
            commands=commands,
        )

    async def run_action(self, action: Action, commands: list[ExecLog]):
        if isinstance(action, RunCommand):
            commands.append(await self.run_command(action))
        elif isinstance(action, WriteFile):
            content = self.templates.render(action.template, action.context)
            self.file_system.save(action.path, content, mode=action.mode)
        elif isinstance(action, MergeManifest):
            merge_manifest(self.file_system, action.updates)
        else:
            raise ValueError(f"Unknown action: {action!r}")

    async def run_command(self, action: RunCommand) -> ExecLog:
        """
        Run a package manager command.

        :raises CommandError: If the command fails or times out.
        """
        cwd = self.project_name if action.in_project else "."
        started_at = datetime.now(timezone.utc)

        log.info(f"Running command `{' '.join(action.args)}` in {cwd}")
        status_code, stdout, stderr = await self.process_manager.run_command(
            action.args,
            cwd=cwd,
            show_output=self.ui.verbose,
        )

        exec_log = ExecLog(
            started_at=started_at,
            duration=(datetime.now(timezone.utc) - started_at).total_seconds(),
            cmd=action.args,
            cwd=cwd,
            status_code=status_code,
            stdout=stdout,
            stderr=stderr,
        )
        if not exec_log.success:
            raise CommandError(action.args, status_code, stdout, stderr)
        return exec_log

    async def remove_dependencies(self):
        """
        Remove the dependency directory so the user starts with a clean install.
        """
        if self.file_system.exists(DEPENDENCY_DIR):
            self.file_system.remove_tree(DEPENDENCY_DIR)
            await self.ui.send_message(
                f"\nRemoved {DEPENDENCY_DIR} to ensure a clean install for the user.",
                type=MessageType.WARNING,
            )

    async def send_follow_up(self, report: ExecutionReport):
        """
        Print the commands the user should run next, and any failed tasks.
        """
        pm = self.package_manager
        lines = [
            f"\ncd {self.project_name}",
            " ".join(pm.install()),
            " ".join(pm.run("dev")),
        ]
        if report.succeeded(Extra.ESLINT_PRETTIER.value):
            lines.append(" ".join(pm.run("lint")))
            lines.append(" ".join(pm.run("format")))

        await self.ui.send_message("\n".join(lines))

        if report.failed:
            failed = ", ".join(result.name for result in report.failed)
            await self.ui.send_message(f"\nSome steps failed: {failed}", type=MessageType.ERROR)


__all__ = ["ProjectExistsError", "check_project_dir", "StepExecutor"]
