from typing import Any, Optional

from setupkit.log import get_logger
from setupkit.ui.base import MessageType, UIBase
from setupkit.wizard.questions import Question

log = get_logger(__name__)


class VirtualUI(UIBase):
    """
    Non-interactive UI adapter.

    Answers questions from a preset mapping (falling back to each
    question's default) and prints progress as plain text.
    """

    def __init__(self, answers: dict[str, Any], verbose: bool = False, quiet: bool = False):
        self.answers = dict(answers)
        self.verbose = verbose
        self.quiet = quiet

    async def start(self) -> bool:
        log.debug("Starting virtual UI")
        return True

    async def stop(self):
        log.debug("Stopping virtual UI")

    async def send_message(self, message: str, *, type: MessageType = MessageType.PLAIN):
        if self.quiet and type not in (MessageType.PLAIN, MessageType.ERROR):
            return
        print(message)

    async def ask_question(self, question: Question) -> Optional[Any]:
        if question.name in self.answers:
            answer = self.answers[question.name]
        else:
            answer = question.default

        log.debug(f"Answering '{question.name}' with {answer!r}")
        return answer

    async def start_task(self, title: str):
        if not self.quiet:
            print(title)

    async def send_output(self, out: str, err: str):
        print(out + err, end="")

    async def finish_task(self, success: bool, message: str, detail: Optional[str] = None):
        if success and self.quiet:
            return
        print(f"[{'ok' if success else 'failed'}] {message}")
        if not success and detail:
            print(detail)


__all__ = ["VirtualUI"]
