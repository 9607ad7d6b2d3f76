from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from setupkit.templates.registry import TemplateName


class RunCommand(BaseModel):
    """
    Run a package manager command.

    Commands run inside the project directory, except the one that
    creates it (`in_project=False`), which runs in the workspace.
    """

    kind: Literal["run"] = "run"
    args: list[str]
    in_project: bool = True


class WriteFile(BaseModel):
    """
    Write a rendered template to a path in the project.
    """

    kind: Literal["write"] = "write"
    path: str
    template: TemplateName
    context: dict[str, Any] = Field(default_factory=dict)
    mode: Optional[int] = None


class MergeManifest(BaseModel):
    """
    Merge keys into the project's package.json.
    """

    kind: Literal["merge-manifest"] = "merge-manifest"
    updates: dict[str, Any]


Action = Annotated[
    Union[RunCommand, WriteFile, MergeManifest],
    Field(discriminator="kind"),
]


class Task(BaseModel):
    """
    One planned unit of work.

    The actions of a task run in order and share a failure boundary: the
    first failing action stops the task, but not the tasks after it. A
    failed `required` task stops the whole run.
    """

    name: str
    title: str
    success_message: str
    failure_message: str
    actions: list[Action]
    required: bool = False

    @property
    def commands(self) -> list[list[str]]:
        return [action.args for action in self.actions if isinstance(action, RunCommand)]


__all__ = ["RunCommand", "WriteFile", "MergeManifest", "Action", "Task"]
