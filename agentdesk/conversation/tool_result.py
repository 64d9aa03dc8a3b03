"""
Grammar for the tool-result strings written into ``tool`` messages.

The tool-execution layer reports outcomes as plain text rather than JSON:

    Tool "<name>" executed successfully:
    <json payload, possibly pretty-printed>
    (Execution time: <N>ms)

    Tool "<name>" failed: <message>

    Error: <message>          (unknown / disabled / invalid-argument tools)

Changing any of these formats upstream breaks parsing here, so the matching
formatters live in this module too.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from agentdesk.types import ToolStatus

_SUCCESS_RE = re.compile(
    r'Tool "(?P<name>[^"]+)" executed successfully:\n'
    r"(?P<payload>.+)\n"
    r"\(Execution time: (?P<ms>\d+)ms\)",
    re.DOTALL,
)
_FAILURE_RE = re.compile(r'Tool "(?P<name>[^"]+)" failed: (?P<message>.+)')
_ERROR_RE = re.compile(r"^Error: (?P<message>.+)")


@dataclass(frozen=True)
class ToolResultOutcome:
    status: ToolStatus
    result: Any = None
    execution_time: int | None = None
    error: str | None = None
    tool_name: str | None = None


def parse_tool_result(content: str | None) -> ToolResultOutcome:
    """
    Classify a tool message body.

    Success payloads are JSON-decoded when possible, otherwise kept as the raw
    payload text.  Content matching no known marker is reported as completed
    with the raw text as its result.
    """
    text = content or ""

    m = _SUCCESS_RE.search(text)
    if m:
        payload = m.group("payload")
        try:
            result = json.loads(payload)
        except (ValueError, RecursionError):
            result = payload
        return ToolResultOutcome(
            status=ToolStatus.COMPLETED,
            result=result,
            execution_time=int(m.group("ms")),
            tool_name=m.group("name"),
        )

    m = _FAILURE_RE.search(text)
    if m:
        return ToolResultOutcome(
            status=ToolStatus.FAILED,
            error=m.group("message"),
            tool_name=m.group("name"),
        )

    m = _ERROR_RE.match(text)
    if m:
        return ToolResultOutcome(status=ToolStatus.FAILED, error=m.group("message"))

    return ToolResultOutcome(status=ToolStatus.COMPLETED, result=text)


def format_tool_success(tool_name: str, result: Any, execution_time_ms: int) -> str:
    payload = json.dumps(result, indent=2, default=str)
    return (
        f'Tool "{tool_name}" executed successfully:\n'
        f"{payload}\n"
        f"(Execution time: {execution_time_ms}ms)"
    )


def format_tool_failure(tool_name: str, message: str) -> str:
    return f'Tool "{tool_name}" failed: {message}'
