from unittest.mock import AsyncMock

import pytest

from setupkit.ui.virtual import VirtualUI
from setupkit.wizard.answers import Answers, Cancelled, Extra, PackageManagerName
from setupkit.wizard.flow import run_prompt_flow
from setupkit.wizard.questions import QUESTIONS


@pytest.mark.asyncio
async def test_flow_asks_all_questions(mock_ui):
    answers = {q.name: q.default for q in QUESTIONS}
    answers["extras"] = ["clsx"]
    mock_ui.ask_question = AsyncMock(side_effect=lambda q: answers[q.name])

    record = await run_prompt_flow(mock_ui)

    assert isinstance(record, Answers)
    assert record.extras == frozenset({Extra.CLSX})
    asked = [call.args[0].name for call in mock_ui.ask_question.await_args_list]
    assert asked == [q.name for q in QUESTIONS]


@pytest.mark.asyncio
async def test_flow_stops_at_cancelled_question(mock_ui):
    mock_ui.ask_question = AsyncMock(side_effect=["vue-ts", "npm", None])

    record = await run_prompt_flow(mock_ui)

    assert isinstance(record, Cancelled)
    assert record.missing[0] == "routing"
    assert "extras" in record.missing
    assert mock_ui.ask_question.await_count == 3


@pytest.mark.asyncio
async def test_flow_with_virtual_ui():
    ui = VirtualUI({"packageManager": "deno", "styling": "tailwindcss"})

    record = await run_prompt_flow(ui)

    assert isinstance(record, Answers)
    assert record.package_manager == PackageManagerName.DENO
    assert record.styling.value == "tailwindcss"
    assert record.routing.value == ""
