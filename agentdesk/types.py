from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ToolStatus(str, Enum):
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ToolCallDisplay:
    """
    Display state of one tool invocation.

    The transformer creates these in ``executing`` state and later mutates the
    same object to ``completed`` or ``failed`` once the result message shows up.
    """

    tool_name: str
    parameters: dict[str, Any] = field(default_factory=dict)
    status: ToolStatus = ToolStatus.EXECUTING
    result: Any = None
    execution_time: int | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (ToolStatus.COMPLETED, ToolStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "toolName": self.tool_name,
            "parameters": self.parameters,
            "status": self.status.value,
        }
        if self.status is ToolStatus.COMPLETED:
            d["result"] = self.result
        if self.execution_time is not None:
            d["executionTime"] = self.execution_time
        if self.error is not None:
            d["error"] = self.error
        return d


@dataclass
class DisplayTurn:
    role: str  # "user" or "assistant"
    content: str = ""
    tool_call: ToolCallDisplay | None = None
    reasoning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_call is not None:
            d["toolCall"] = self.tool_call.to_dict()
        if self.reasoning is not None:
            d["reasoning"] = self.reasoning
        return d
