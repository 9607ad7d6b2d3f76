from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from setupkit.wizard.answers import Answers

DEFAULT_ANSWERS = {
    "framework": "vite-react-ts",
    "packageManager": "pnpm",
    "routing": "",
    "query": "",
    "forms": "",
    "stateManagement": "",
    "styling": "",
    "icons": "",
    "extras": [],
}


@pytest.fixture
def make_answers() -> Callable[..., Answers]:
    """
    Build an answer record, overriding the defaults with keyword arguments.

    Keyword arguments use the question names (eg. `packageManager="npm"`).
    """

    def _make_answers(**overrides: Any) -> Answers:
        return Answers.model_validate({**DEFAULT_ANSWERS, **overrides})

    return _make_answers


@pytest.fixture
def mock_ui():
    """
    UI mock recording all messages and task progress.
    """
    ui = MagicMock(
        verbose=False,
        quiet=False,
        start=AsyncMock(return_value=True),
        stop=AsyncMock(),
        send_message=AsyncMock(),
        ask_question=AsyncMock(),
        start_task=AsyncMock(),
        send_output=AsyncMock(),
        finish_task=AsyncMock(),
    )
    return ui
