"""Conversation display: transcript transformers and tool-result parsing."""

from agentdesk.conversation.tool_result import (
    ToolResultOutcome,
    format_tool_failure,
    format_tool_success,
    parse_tool_result,
)
from agentdesk.conversation.transformer import (
    ConversationTransformer,
    GLMTransformer,
    create_transformer,
)

__all__ = [
    "ConversationTransformer",
    "GLMTransformer",
    "ToolResultOutcome",
    "create_transformer",
    "format_tool_failure",
    "format_tool_success",
    "parse_tool_result",
]
