"""Handler interfaces the host application programs against."""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from comet_gateway.stream import StreamEvent


@dataclass(frozen=True)
class CreateMessageMetadata:
    """Per-request context passed through from the host."""

    task_id: str | None = None
    mode: str | None = None


@runtime_checkable
class ApiHandler(Protocol):
    """Protocol that every streaming handler must satisfy."""

    def create_message(
        self,
        system_prompt: str,
        messages: Sequence[dict[str, Any]],
        metadata: CreateMessageMetadata | None = None,
    ) -> Iterator[StreamEvent]:
        """Send a conversation and yield normalized stream events."""
        ...

    def get_model(self) -> Any:
        """Return the currently selected model and its parameters."""
        ...


@runtime_checkable
class SingleCompletionHandler(Protocol):
    """Handlers that can also answer a one-shot prompt."""

    def complete_prompt(self, prompt: str) -> str:
        ...
