"""Translation of Anthropic-format messages into OpenAI chat messages."""
from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

JSON = dict[str, Any]


def convert_to_openai_messages(messages: Iterable[JSON]) -> list[JSON]:
    """Convert Anthropic ``MessageParam`` dicts to OpenAI chat-completion messages.

    String content passes through unchanged. Block content is split by role:
    user ``tool_result`` blocks become ``role: "tool"`` messages placed before
    the rest of the user content, and assistant ``tool_use`` blocks become
    ``tool_calls``.
    """
    out: list[JSON] = []
    for message in messages:
        role = message["role"]
        content = message.get("content")

        if isinstance(content, str) or content is None:
            out.append({"role": role, "content": content if content is not None else ""})
            continue

        if role == "assistant":
            out.append(_translate_assistant(content))
        else:
            out.extend(_translate_user(role, content))
    return out


def _translate_user(role: str, blocks: list[JSON]) -> list[JSON]:
    tool_messages: list[JSON] = []
    parts: list[JSON] = []

    for block in blocks:
        kind = block.get("type")
        if kind == "tool_result":
            tool_messages.append(
                {
                    "role": "tool",
                    "tool_call_id": block.get("tool_use_id", ""),
                    "content": _tool_result_text(block.get("content")),
                }
            )
        elif kind == "text":
            parts.append({"type": "text", "text": block.get("text", "")})
        elif kind == "image":
            image_url = _image_url(block.get("source") or {})
            if image_url:
                parts.append({"type": "image_url", "image_url": {"url": image_url}})

    result = list(tool_messages)
    if parts:
        result.append({"role": role, "content": parts})
    return result


def _translate_assistant(blocks: list[JSON]) -> JSON:
    texts: list[str] = []
    tool_calls: list[JSON] = []

    for block in blocks:
        kind = block.get("type")
        if kind == "text":
            texts.append(block.get("text", ""))
        elif kind == "tool_use":
            args = block.get("input", {})
            tool_calls.append(
                {
                    "id": block.get("id", ""),
                    "type": "function",
                    "function": {
                        "name": block.get("name", ""),
                        "arguments": args if isinstance(args, str) else json.dumps(args),
                    },
                }
            )

    message: JSON = {"role": "assistant", "content": "\n".join(texts) if texts else None}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return message


def _tool_result_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    # Tool messages are text-only; image parts are dropped
    return "\n".join(part.get("text", "") for part in content if part.get("type") == "text")


def _image_url(source: JSON) -> str | None:
    if source.get("type") == "base64" and source.get("data"):
        return f"data:{source.get('media_type', 'image/png')};base64,{source['data']}"
    if source.get("type") == "url":
        return source.get("url")
    return None
