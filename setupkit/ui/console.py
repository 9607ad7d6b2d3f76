from typing import Any, Optional

import questionary
from colorama import Fore, Style
from colorama import init as colorama_init
from yaspin import yaspin
from yaspin.spinners import Spinners

from setupkit.log import get_logger
from setupkit.ui.base import MessageType, UIBase
from setupkit.wizard.questions import Question, QuestionType

log = get_logger(__name__)

QUESTION_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("answer", "#FF910A bold"),
        ("pointer", "#FF4500 bold"),
        ("highlighted", "#63CD91 bold"),
        ("instruction", "#FFFF00"),
    ]
)

MESSAGE_STYLES = {
    MessageType.PLAIN: "",
    MessageType.INFO: Style.BRIGHT + Fore.BLUE,
    MessageType.SUCCESS: Style.BRIGHT + Fore.GREEN,
    MessageType.WARNING: Style.BRIGHT + Fore.YELLOW,
    MessageType.ERROR: Style.BRIGHT + Fore.RED,
}

# Shown even in quiet mode
QUIET_MESSAGE_TYPES = (MessageType.PLAIN, MessageType.ERROR)

SUCCESS_SYMBOL = Fore.GREEN + "✔" + Style.RESET_ALL
FAILURE_SYMBOL = Fore.RED + "✖" + Style.RESET_ALL


class ConsoleUI(UIBase):
    """
    UI adapter for the interactive terminal.

    Questions are asked with questionary, task progress is shown with a
    yaspin spinner and messages are colored with colorama.
    """

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.verbose = verbose
        self.quiet = quiet
        self.spinner = None

    async def start(self) -> bool:
        log.debug("Starting console UI")
        colorama_init()
        return True

    async def stop(self):
        log.debug("Stopping console UI")
        if self.spinner:
            self.spinner.stop()
            self.spinner = None

    async def send_message(self, message: str, *, type: MessageType = MessageType.PLAIN):
        if self.quiet and type not in QUIET_MESSAGE_TYPES:
            return

        style = MESSAGE_STYLES[type]
        if style:
            print(f"{style}{message}{Style.RESET_ALL}", flush=True)
        else:
            print(message, flush=True)

    async def ask_question(self, question: Question) -> Optional[Any]:
        choices = [questionary.Choice(choice.title, value=choice.value) for choice in question.choices]

        if question.type == QuestionType.MULTISELECT:
            prompt = questionary.checkbox(question.message, choices=choices, style=QUESTION_STYLE)
        else:
            prompt = questionary.select(
                question.message,
                choices=choices,
                default=question.default,
                style=QUESTION_STYLE,
            )

        # ask_async() returns None when the user hits Ctrl+C
        return await prompt.ask_async()

    async def start_task(self, title: str):
        log.debug(f"Starting task: {title}")
        if self.quiet:
            return
        self.spinner = yaspin(Spinners.line, text=title)
        self.spinner.start()

    async def send_output(self, out: str, err: str):
        for chunk in (out, err):
            if not chunk:
                continue
            if self.spinner:
                self.spinner.write(chunk.rstrip("\n"))
            else:
                print(chunk, end="", flush=True)

    async def finish_task(self, success: bool, message: str, detail: Optional[str] = None):
        if self.spinner:
            self.spinner.text = message
            if success:
                self.spinner.ok(SUCCESS_SYMBOL)
            else:
                self.spinner.fail(FAILURE_SYMBOL)
            self.spinner = None
        elif not success or not self.quiet:
            symbol = SUCCESS_SYMBOL if success else FAILURE_SYMBOL
            print(f"{symbol} {message}", flush=True)

        if not success and detail:
            print(f"{Fore.RED}{detail}{Style.RESET_ALL}", flush=True)


__all__ = ["ConsoleUI"]
