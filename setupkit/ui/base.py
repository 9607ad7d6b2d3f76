from enum import Enum
from typing import Any, Optional

from setupkit.wizard.questions import Question


class MessageType(str, Enum):
    """Kind of message, used by UI adapters to pick a style."""

    PLAIN = "plain"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UIBase:
    """
    Base class for UI adapters.
    """

    verbose: bool = False
    quiet: bool = False

    async def start(self) -> bool:
        """
        Start the UI adapter.

        :return: Whether the UI was started successfully.
        """
        raise NotImplementedError()

    async def stop(self):
        """
        Stop the UI adapter.
        """
        raise NotImplementedError()

    async def send_message(self, message: str, *, type: MessageType = MessageType.PLAIN):
        """
        Send a complete message to the UI.

        :param message: Message content.
        :param type: Kind of message (affects styling and quiet mode filtering).
        """
        raise NotImplementedError()

    async def ask_question(self, question: Question) -> Optional[Any]:
        """
        Ask the user a question from the prompt flow.

        :param question: Question definition.
        :return: Selected value (a list of values for multiselect questions),
            or None if the user cancelled.
        """
        raise NotImplementedError()

    async def start_task(self, title: str):
        """
        Show that a task has started (eg. a spinner).

        :param title: Progress text (eg. "Installing Zustand...").
        """
        raise NotImplementedError()

    async def send_output(self, out: str, err: str):
        """
        Show live output of a running command.

        :param out: New standard output.
        :param err: New standard error.
        """
        raise NotImplementedError()

    async def finish_task(self, success: bool, message: str, detail: Optional[str] = None):
        """
        Show the outcome of the current task.

        :param success: Whether the task succeeded.
        :param message: Outcome message (eg. "Zustand installed.").
        :param detail: Error detail to show when the task failed.
        """
        raise NotImplementedError()


__all__ = ["MessageType", "UIBase"]
