from typing import Optional

from setupkit.log import get_logger
from setupkit.ui.base import UIBase
from setupkit.wizard.answers import AnswerRecord, build_answer_record
from setupkit.wizard.questions import QUESTIONS, Question

log = get_logger(__name__)


async def run_prompt_flow(ui: UIBase, questions: Optional[list[Question]] = None) -> AnswerRecord:
    """
    Ask all the project setup questions in order.

    The flow stops at the first unanswered (cancelled) question; the
    remaining answers stay undefined and the result is `Cancelled`.

    :param ui: User interface to ask the questions through.
    :param questions: Questions to ask (defaults to the standard set).
    :return: Answer record.
    """
    values = {}
    for question in questions if questions is not None else QUESTIONS:
        answer = await ui.ask_question(question)
        if answer is None:
            log.info(f"Prompt flow cancelled at question '{question.name}'")
            break
        values[question.name] = answer

    return build_answer_record(values)


__all__ = ["run_prompt_flow"]
