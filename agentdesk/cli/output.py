"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from agentdesk.types import DisplayTurn, ToolCallDisplay, ToolStatus

STATUS_COLORS = {
    ToolStatus.EXECUTING: "yellow",
    ToolStatus.COMPLETED: "green",
    ToolStatus.FAILED: "red",
}

ROLE_COLORS = {
    "user": "blue",
    "assistant": "green",
}


class TurnFormatter:
    """Rich-based rendering of display turns as chat bubbles."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        show_parameters: bool = True,
        show_reasoning: bool = True,
        max_result_chars: int = 2_000,
    ) -> None:
        self.console = console or Console()
        self.show_parameters = show_parameters
        self.show_reasoning = show_reasoning
        self.max_result_chars = max_result_chars

    def format_turns(self, turns: list[DisplayTurn]) -> None:
        if not turns:
            self.console.print("[dim]No messages.[/dim]")
            return
        for turn in turns:
            if turn.tool_call is not None:
                self.format_tool_call(turn.tool_call)
            else:
                self.format_message(turn)

    def format_message(self, turn: DisplayTurn) -> None:
        color = ROLE_COLORS.get(turn.role, "white")
        if self.show_reasoning and turn.reasoning:
            self.console.print(Panel(
                Text(turn.reasoning, style="dim italic"),
                title="thinking",
                border_style="dim",
            ))
        if turn.content:
            self.console.print(Panel(
                Text(turn.content),
                title=f"[{color}]{turn.role}[/{color}]",
                title_align="left" if turn.role == "assistant" else "right",
                border_style=color,
            ))

    def format_tool_call(self, call: ToolCallDisplay) -> None:
        color = STATUS_COLORS.get(call.status, "white")
        header = Text.assemble(
            ("tool ", "bold"),
            (call.tool_name, "cyan"),
            "  ",
            (f"[{call.status.value}]", color),
        )
        if call.execution_time is not None:
            header.append(f"  {call.execution_time}ms", style="dim")
        self.console.print(header)

        if self.show_parameters and call.parameters:
            self.console.print(Syntax(_dump(call.parameters), "json", theme="monokai"))

        if not call.is_terminal:
            return
        if call.status is ToolStatus.FAILED:
            if call.error:
                self.console.print(f"  [red]error:[/red] {escape(call.error)}")
        else:
            body = _dump(call.result) if not isinstance(call.result, str) else call.result
            if len(body) > self.max_result_chars:
                body = body[: self.max_result_chars] + "\n... (truncated)"
            self.console.print(Panel(Text(body), title="result", border_style=color))

    def format_config(self, config: dict) -> None:
        self.console.print(Syntax(_dump(config), "json", theme="monokai"))


def turns_to_json(turns: list[DisplayTurn]) -> str:
    return json.dumps([t.to_dict() for t in turns], indent=2, default=str)


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)
