from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class ExecLog(BaseModel):
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration: float = Field(description="The duration of the command run in seconds")
    cmd: list[str] = Field(description="The program and its arguments")
    cwd: str = Field(description="The working directory for the command")
    status_code: Optional[int] = Field(description="The command return code, or None if there was a timeout")
    stdout: str = Field(description="The command standard output")
    stderr: str = Field(description="The command standard error")

    @property
    def success(self) -> bool:
        return self.status_code == 0


__all__ = ["ExecLog"]
