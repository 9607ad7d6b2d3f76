import sys
from argparse import Namespace
from asyncio import run
from typing import Optional, Sequence

from setupkit.cli.helpers import init, show_config
from setupkit.config import Config
from setupkit.executor.executor import ProjectExistsError, StepExecutor, check_project_dir
from setupkit.log import get_logger
from setupkit.plan.package_managers import get_package_manager
from setupkit.plan.planner import plan_installation
from setupkit.ui.base import MessageType, UIBase
from setupkit.wizard.answers import Cancelled
from setupkit.wizard.flow import run_prompt_flow

log = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


async def create_project(ui: UIBase, config: Config, project_name: str) -> int:
    """
    Ask the setup questions, then create and configure the project.

    :param ui: User interface.
    :param config: Application configuration.
    :param project_name: Name of the project directory to create.
    :return: Process exit code.
    """
    # Fail before asking anything if the project can't be created
    try:
        check_project_dir(config.workspace_root, project_name)
    except ProjectExistsError as err:
        log.warning(str(err))
        await ui.send_message(f"Catalog {project_name} already exists!", type=MessageType.ERROR)
        return EXIT_FAILURE

    record = await run_prompt_flow(ui)
    if isinstance(record, Cancelled):
        log.info(f"Cancelled by user, unanswered: {', '.join(record.missing)}")
        await ui.send_message("Process canceled by user.", type=MessageType.WARNING)
        return EXIT_SUCCESS

    if ui.verbose:
        await ui.send_message("--verbose mode is enabled", type=MessageType.INFO)
    elif ui.quiet:
        # Quiet mode hides info messages
        await ui.send_message("--quiet mode is enabled")

    package_manager = get_package_manager(record.package_manager.value)
    tasks = plan_installation(record, project_name, package_manager)

    executor = StepExecutor(
        ui,
        project_name,
        package_manager,
        workspace=config.workspace_root,
        timeout=config.proc.timeout,
    )
    report = await executor.run(tasks)
    if report.aborted:
        await ui.send_message("Error initializing project.", type=MessageType.ERROR)
        return EXIT_FAILURE

    return EXIT_SUCCESS


async def async_main(ui: UIBase, config: Config, args: Namespace) -> int:
    """
    Main application coroutine.

    :param ui: User interface.
    :param config: Application configuration.
    :param args: Command-line arguments.
    :return: Process exit code.
    """
    if args.show_config:
        show_config()
        return EXIT_SUCCESS

    ui_started = await ui.start()
    if not ui_started:
        return EXIT_FAILURE

    try:
        return await create_project(ui, config, args.project_name)
    except ProjectExistsError as err:
        log.warning(str(err))
        await ui.send_message(f"Catalog {args.project_name} already exists!", type=MessageType.ERROR)
        return EXIT_FAILURE
    except Exception as err:
        log.error(f"Uncaught exception: {err}", exc_info=True)
        await ui.send_message("Error initializing project.", type=MessageType.ERROR)
        return EXIT_FAILURE
    finally:
        await ui.stop()


def run_setup(argv: Optional[Sequence[str]] = None) -> int:
    ui, config, args = init(argv)
    if not ui or not config:
        return EXIT_FAILURE
    return run(async_main(ui, config, args))


if __name__ == "__main__":
    sys.exit(run_setup())
