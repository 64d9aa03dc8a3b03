"""
Converts provider chat transcripts into display turns for the chat UI.

Design goals:
  - Single forward pass, no lookahead.  Each tool call is emitted as an
    ``executing`` turn the moment its assistant message is seen and kept in a
    per-call ``pending`` map keyed by call id.
  - A later ``tool`` message updates that same ``ToolCallDisplay`` object in
    place; no new turn is appended.  Callers holding a reference to the turn
    see it change state.
  - Bad input never raises.  Orphaned or id-less tool messages are dropped
    with a warning, unparseable arguments become ``{}`` with an error log.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from agentdesk.conversation.tool_result import parse_tool_result
from agentdesk.llm.types import (
    AssistantMessage,
    ProviderType,
    RawMessage,
    SystemMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
    message_from_dict,
)
from agentdesk.types import DisplayTurn, ToolCallDisplay, ToolStatus

logger = logging.getLogger(__name__)


class ConversationTransformer:
    """Transforms OpenAI-format transcripts into ``DisplayTurn`` lists."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transform(self, messages: Sequence[RawMessage | dict[str, Any]]) -> list[DisplayTurn]:
        """
        Build the display turns for *messages*.

        Plain wire dicts are accepted alongside typed messages.  State lives
        only for the duration of this call.
        """
        output: list[DisplayTurn] = []
        pending: dict[str, DisplayTurn] = {}

        for raw in messages:
            message = message_from_dict(raw) if isinstance(raw, dict) else raw

            if isinstance(message, SystemMessage):
                continue
            if isinstance(message, UserMessage):
                output.append(DisplayTurn(role="user", content=message.content or ""))
            elif isinstance(message, AssistantMessage):
                self._handle_assistant(message, output, pending)
            elif isinstance(message, ToolMessage):
                self._handle_tool(message, pending)
            else:
                logger.warning("Skipping message with unknown role: %r", raw)

        return output

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _content_turn(self, message: AssistantMessage) -> DisplayTurn | None:
        """The text part of an assistant message, or ``None`` when empty."""
        if message.content:
            return DisplayTurn(role="assistant", content=message.content)
        return None

    def _handle_assistant(
        self,
        message: AssistantMessage,
        output: list[DisplayTurn],
        pending: dict[str, DisplayTurn],
    ) -> None:
        turn = self._content_turn(message)
        if turn is not None:
            output.append(turn)

        for request in message.tool_calls or []:
            call_turn = DisplayTurn(
                role="assistant",
                content="",
                tool_call=ToolCallDisplay(
                    tool_name=request.function.name,
                    parameters=self._parse_arguments(request),
                    status=ToolStatus.EXECUTING,
                ),
            )
            output.append(call_turn)

            if request.id in pending:
                logger.warning(
                    "Duplicate pending tool_call_id %s; earlier call stays executing",
                    request.id,
                )
            pending[request.id] = call_turn

    def _handle_tool(self, message: ToolMessage, pending: dict[str, DisplayTurn]) -> None:
        call_id = message.tool_call_id
        if not call_id:
            logger.warning("Tool message missing tool_call_id: %r", message)
            return

        turn = pending.pop(call_id, None)
        if turn is None:
            logger.warning("No pending tool call found for tool_call_id: %s", call_id)
            return

        outcome = parse_tool_result(message.content)
        tool_call = turn.tool_call
        tool_call.status = outcome.status
        tool_call.result = outcome.result
        tool_call.execution_time = outcome.execution_time
        tool_call.error = outcome.error

    @staticmethod
    def _parse_arguments(request: ToolCallRequest) -> dict[str, Any]:
        raw = request.function.arguments
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.error(
                "Failed to parse arguments for tool %s: %r (%s)",
                request.function.name, raw, exc,
            )
            return {}
        if not isinstance(parsed, dict):
            logger.error(
                "Arguments for tool %s are not a JSON object: %r",
                request.function.name, raw,
            )
            return {}
        return parsed


class GLMTransformer(ConversationTransformer):
    """
    Transformer for GLM transcripts.

    GLM speaks the OpenAI wire format plus ``reasoning_content`` on assistant
    messages; a message carrying reasoning always gets a content turn so the
    thinking trace can be rendered, even when its text is empty.
    """

    def _content_turn(self, message: AssistantMessage) -> DisplayTurn | None:
        if message.content or message.reasoning_content:
            return DisplayTurn(
                role="assistant",
                content=message.content or "",
                reasoning=message.reasoning_content or None,
            )
        return None


_TRANSFORMERS: dict[ProviderType, type[ConversationTransformer]] = {
    ProviderType.OPENAI: ConversationTransformer,
    ProviderType.AZURE: ConversationTransformer,
    ProviderType.CUSTOM: ConversationTransformer,
    ProviderType.GLM: GLMTransformer,
}


def create_transformer(provider_type: ProviderType | str) -> ConversationTransformer:
    """Return the transformer matching an agent's provider type."""
    try:
        key = ProviderType(provider_type)
    except ValueError:
        raise ValueError(f"Unsupported provider type: {provider_type}") from None
    return _TRANSFORMERS[key]()
