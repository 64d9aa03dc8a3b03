"""LLM transcript model -- typed provider messages and tool-call requests."""

from agentdesk.llm.types import (
    AssistantMessage,
    FunctionCall,
    ProviderType,
    RawMessage,
    SystemMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
    message_from_dict,
    messages_from_dicts,
)

__all__ = [
    "AssistantMessage",
    "FunctionCall",
    "ProviderType",
    "RawMessage",
    "SystemMessage",
    "ToolCallRequest",
    "ToolMessage",
    "UserMessage",
    "message_from_dict",
    "messages_from_dicts",
]
