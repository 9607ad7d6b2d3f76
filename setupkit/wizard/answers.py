from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


class Framework(str, Enum):
    VITE_REACT_TS = "vite-react-ts"
    VUE_TS = "vue-ts"


class PackageManagerName(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    DENO = "deno"


class Routing(str, Enum):
    NONE = ""
    REACT_ROUTER = "react-router"


class Query(str, Enum):
    NONE = ""
    AXIOS = "axios"
    SWR = "swr"
    REACT_QUERY = "react-query"


class Forms(str, Enum):
    NONE = ""
    REACT_HOOK_FORM = "react-hook-form"
    FORMIK = "formik"


class StateManagement(str, Enum):
    NONE = ""
    ZUSTAND = "zustand"


class Styling(str, Enum):
    NONE = ""
    TAILWINDCSS = "tailwindcss"
    SASS = "sass"


class Icons(str, Enum):
    NONE = ""
    LUCIDE_ICONS = "lucide-icons"


class Extra(str, Enum):
    ESLINT_PRETTIER = "eslint-prettier"
    HUSKY_LINT_STAGED = "husky-lint-staged"
    VITE_ALIASES = "vite-aliases"
    CLSX = "clsx"


REQUIRED_KEYS = [
    "framework",
    "packageManager",
    "routing",
    "query",
    "forms",
    "stateManagement",
    "styling",
    "icons",
    "extras",
]


class Cancelled(BaseModel):
    """
    The user cancelled the prompt flow before answering every question.

    Attributes:
    * `missing`: Names of the questions left unanswered.
    """

    model_config = ConfigDict(frozen=True)

    missing: list[str] = Field(default_factory=list)


class Answers(BaseModel):
    """
    Complete set of user selections driving the installation plan.

    Field aliases match the question names (eg. `packageManager`), so
    answers can be validated straight from the prompt flow output.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    framework: Framework
    package_manager: PackageManagerName = Field(alias="packageManager")
    routing: Routing
    query: Query
    forms: Forms
    state_management: StateManagement = Field(alias="stateManagement")
    styling: Styling
    icons: Icons
    extras: frozenset[Extra]

    def has_extra(self, extra: Extra) -> bool:
        return extra in self.extras


AnswerRecord = Union[Answers, Cancelled]


def build_answer_record(values: Mapping[str, Any]) -> AnswerRecord:
    """
    Turn raw prompt answers into an answer record.

    If any required answer is missing (or None), the whole record is
    treated as cancelled. Otherwise the values are validated against the
    allowed choices; invalid values raise pydantic's `ValidationError`.

    :param values: Answers keyed by question name.
    :return: `Answers` if every question was answered, `Cancelled` otherwise.
    """
    missing = [key for key in REQUIRED_KEYS if values.get(key) is None]
    if missing:
        return Cancelled(missing=missing)

    return Answers.model_validate({key: values[key] for key in REQUIRED_KEYS})


__all__ = [
    "Framework",
    "PackageManagerName",
    "Routing",
    "Query",
    "Forms",
    "StateManagement",
    "Styling",
    "Icons",
    "Extra",
    "REQUIRED_KEYS",
    "Cancelled",
    "Answers",
    "AnswerRecord",
    "build_answer_record",
]
