from typing import Optional

from pydantic import BaseModel, Field

from setupkit.proc.exec_log import ExecLog


class TaskResult(BaseModel):
    """
    Outcome of a single task.
    """

    name: str
    success: bool
    message: str = Field(description="Success or failure message shown to the user")
    error: Optional[str] = Field(None, description="Error detail, if the task failed")
    duration: float = Field(0.0, description="Task duration in seconds")
    commands: list[ExecLog] = Field(default_factory=list)


class ExecutionReport(BaseModel):
    """
    Summary of a scaffolding run.

    Attributes:
    * `results`: Per-task results, in execution order.
    * `aborted`: Whether a required task failed and the run stopped early.
    """

    results: list[TaskResult] = Field(default_factory=list)
    aborted: bool = False

    def add(self, result: TaskResult):
        self.results.append(result)

    @property
    def failed(self) -> list[TaskResult]:
        return [result for result in self.results if not result.success]

    @property
    def success(self) -> bool:
        return not self.aborted and not self.failed

    def succeeded(self, name: str) -> bool:
        """Whether a task with the given name ran and succeeded."""
        return any(result.name == name and result.success for result in self.results)


__all__ = ["TaskResult", "ExecutionReport"]
