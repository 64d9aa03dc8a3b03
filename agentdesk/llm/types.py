"""
Raw transcript model for OpenAI-compatible chat logs.

A provider transcript is a flat list of role-tagged dicts.  Each role gets its
own dataclass here carrying only the fields valid for that role, so the
transformer can dispatch on type instead of probing optional keys.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    """LLM provider dialects an agent can be configured with."""

    OPENAI = "openai"
    AZURE = "azure"
    CUSTOM = "custom"
    GLM = "glm"


@dataclass
class FunctionCall:
    """Function name plus the JSON-encoded argument string, as sent."""

    name: str
    arguments: str = ""


@dataclass
class ToolCallRequest:
    """A tool invocation requested inside an assistant message."""

    id: str
    function: FunctionCall
    type: str = "function"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolCallRequest | None:
        """Build from the wire shape; ``None`` when the entry is unusable."""
        if not isinstance(data, dict):
            return None
        fn = data.get("function")
        if not isinstance(fn, dict):
            return None
        arguments = fn.get("arguments")
        if arguments is None:
            arguments = ""
        elif not isinstance(arguments, str):
            # Some SDKs hand back already-decoded arguments.
            arguments = _json_dumps(arguments)
        call_id = data.get("id")
        return cls(
            id="" if call_id is None else str(call_id),
            function=FunctionCall(name=str(fn.get("name") or ""), arguments=arguments),
            type=data.get("type") or "function",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {
                "name": self.function.name,
                "arguments": self.function.arguments,
            },
        }


@dataclass
class SystemMessage:
    content: str = ""
    role: str = "system"

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class UserMessage:
    content: str | None = None
    role: str = "user"

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class AssistantMessage:
    """
    An assistant turn.

    *content* and *tool_calls* may both be present; GLM additionally sends
    *reasoning_content* with the model's thinking trace.
    """

    content: str | None = None
    tool_calls: list[ToolCallRequest] | None = None
    reasoning_content: str | None = None
    role: str = "assistant"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls is not None:
            d["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.reasoning_content is not None:
            d["reasoning_content"] = self.reasoning_content
        return d


@dataclass
class ToolMessage:
    """Result text produced by the tool-execution layer for one call id."""

    content: str = ""
    tool_call_id: str | None = None
    role: str = "tool"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_call_id is not None:
            d["tool_call_id"] = self.tool_call_id
        return d


RawMessage = Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage]


# ---------------------------------------------------------------------------
# Wire -> typed
# ---------------------------------------------------------------------------

def message_from_dict(data: Any) -> RawMessage | None:
    """
    Build a typed message from a provider wire dict.

    Unknown keys (``timestamp`` and friends) are ignored.  Returns ``None``
    for non-dicts and unknown roles; never raises.
    """
    if not isinstance(data, dict):
        return None

    role = data.get("role")
    if role == "system":
        return SystemMessage(content=_text(data.get("content")) or "")
    if role == "user":
        return UserMessage(content=_text(data.get("content")))
    if role == "assistant":
        return AssistantMessage(
            content=_text(data.get("content")),
            tool_calls=_tool_calls(data.get("tool_calls")),
            reasoning_content=_text(data.get("reasoning_content")),
        )
    if role == "tool":
        call_id = data.get("tool_call_id")
        return ToolMessage(
            content=_text(data.get("content")) or "",
            tool_call_id=str(call_id) if call_id is not None and call_id != "" else None,
        )
    return None


def messages_from_dicts(items: Iterable[Any]) -> list[RawMessage]:
    """Coerce a list of wire dicts, dropping entries that do not parse."""
    out: list[RawMessage] = []
    for item in items:
        msg = message_from_dict(item)
        if msg is None:
            logger.warning("Dropping unrecognised transcript entry: %r", item)
            continue
        out.append(msg)
    return out


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # Multi-part content arrives as [{"type": "text", "text": ...}, ...]
    if isinstance(value, list):
        parts = [
            p["text"] for p in value
            if isinstance(p, dict) and p.get("type") == "text"
            and isinstance(p.get("text"), str)
        ]
        return "".join(parts)
    return str(value)


def _tool_calls(value: Any) -> list[ToolCallRequest] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Ignoring non-list tool_calls: %r", value)
        return None
    calls: list[ToolCallRequest] = []
    for entry in value:
        tc = ToolCallRequest.from_dict(entry)
        if tc is None:
            logger.warning("Skipping malformed tool call entry: %r", entry)
            continue
        calls.append(tc)
    return calls


def _json_dumps(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
