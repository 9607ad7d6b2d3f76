from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class QuestionType(str, Enum):
    SELECT = "select"
    MULTISELECT = "multiselect"


class QuestionChoice(BaseModel):
    title: str
    value: str


class Question(BaseModel):
    """
    A single question in the prompt flow.

    Attributes:
    * `type`: Single choice (`select`) or multiple choice (`multiselect`).
    * `name`: Answer key (eg. `packageManager`).
    * `message`: Prompt shown to the user.
    * `choices`: Allowed values with their display titles.
    * `initial`: Index of the preselected choice (`select` only).
    """

    type: QuestionType
    name: str
    message: str
    choices: list[QuestionChoice]
    initial: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_initial(self) -> "Question":
        if self.initial is not None and self.initial >= len(self.choices):
            raise ValueError(f"Initial choice {self.initial} out of range for question {self.name}")
        return self

    @property
    def default(self) -> Any:
        """Value preselected for this question."""
        if self.type == QuestionType.MULTISELECT:
            return []
        return self.choices[self.initial or 0].value

    @property
    def values(self) -> list[str]:
        return [choice.value for choice in self.choices]


def _skip(title: str = "None") -> QuestionChoice:
    return QuestionChoice(title=title, value="")


QUESTIONS = [
    Question(
        type=QuestionType.SELECT,
        name="framework",
        message="Select a framework",
        choices=[
            QuestionChoice(title="Vite + React + TypeScript", value="vite-react-ts"),
            QuestionChoice(title="Vue + TypeScript", value="vue-ts"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="packageManager",
        message="Select a package manager",
        choices=[
            QuestionChoice(title="npm", value="npm"),
            QuestionChoice(title="yarn", value="yarn"),
            QuestionChoice(title="pnpm", value="pnpm"),
            QuestionChoice(title="bun", value="bun"),
            QuestionChoice(title="deno", value="deno"),
        ],
        initial=2,
    ),
    Question(
        type=QuestionType.SELECT,
        name="routing",
        message="Select a routing library",
        choices=[
            _skip(),
            QuestionChoice(title="React Router", value="react-router"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="query",
        message="Select a data fetching library",
        choices=[
            _skip(),
            QuestionChoice(title="Axios", value="axios"),
            QuestionChoice(title="SWR", value="swr"),
            QuestionChoice(title="React Query", value="react-query"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="forms",
        message="Select a forms library",
        choices=[
            _skip(),
            QuestionChoice(title="React Hook Form", value="react-hook-form"),
            QuestionChoice(title="Formik", value="formik"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="stateManagement",
        message="Select a state management library",
        choices=[
            _skip(),
            QuestionChoice(title="Zustand", value="zustand"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="styling",
        message="Select a styling solution",
        choices=[
            _skip(),
            QuestionChoice(title="Tailwind CSS", value="tailwindcss"),
            QuestionChoice(title="SASS", value="sass"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.SELECT,
        name="icons",
        message="Select an icon library",
        choices=[
            _skip(),
            QuestionChoice(title="Lucide Icons", value="lucide-icons"),
        ],
        initial=0,
    ),
    Question(
        type=QuestionType.MULTISELECT,
        name="extras",
        message="Select extra tools to include",
        choices=[
            QuestionChoice(title="ESLint + Prettier", value="eslint-prettier"),
            QuestionChoice(title="Husky + lint-staged", value="husky-lint-staged"),
            QuestionChoice(title="Vite aliases", value="vite-aliases"),
            QuestionChoice(title="CLSX", value="clsx"),
        ],
    ),
]


__all__ = ["QuestionType", "QuestionChoice", "Question", "QUESTIONS"]
