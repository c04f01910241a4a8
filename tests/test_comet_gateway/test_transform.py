"""Tests for Anthropic to OpenAI message translation."""
from __future__ import annotations

import json

from comet_gateway.transform import convert_to_openai_messages


class TestPlainMessages:
    def test_string_content_passes_through(self) -> None:
        messages = [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there"},
        ]
        assert convert_to_openai_messages(messages) == messages

    def test_missing_content(self) -> None:
        assert convert_to_openai_messages([{"role": "user"}]) == [{"role": "user", "content": ""}]

    def test_empty_list(self) -> None:
        assert convert_to_openai_messages([]) == []


class TestUserBlocks:
    def test_text_and_image(self) -> None:
        message = {
            "role": "user",
            "content": [
                {"type": "text", "text": "What is this?"},
                {
                    "type": "image",
                    "source": {"type": "base64", "media_type": "image/jpeg", "data": "AAAA"},
                },
            ],
        }
        assert convert_to_openai_messages([message]) == [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "What is this?"},
                    {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,AAAA"}},
                ],
            }
        ]

    def test_url_image(self) -> None:
        message = {
            "role": "user",
            "content": [{"type": "image", "source": {"type": "url", "url": "https://x.test/a.png"}}],
        }
        out = convert_to_openai_messages([message])
        assert out[0]["content"][0]["image_url"]["url"] == "https://x.test/a.png"

    def test_tool_results_come_first(self) -> None:
        message = {
            "role": "user",
            "content": [
                {"type": "text", "text": "and then?"},
                {"type": "tool_result", "tool_use_id": "call_1", "content": "42"},
            ],
        }
        assert convert_to_openai_messages([message]) == [
            {"role": "tool", "tool_call_id": "call_1", "content": "42"},
            {"role": "user", "content": [{"type": "text", "text": "and then?"}]},
        ]

    def test_tool_result_blocks_flattened(self) -> None:
        message = {
            "role": "user",
            "content": [
                {
                    "type": "tool_result",
                    "tool_use_id": "call_1",
                    "content": [
                        {"type": "text", "text": "line 1"},
                        {"type": "image", "source": {"type": "base64", "data": "AAAA"}},
                        {"type": "text", "text": "line 2"},
                    ],
                }
            ],
        }
        assert convert_to_openai_messages([message]) == [
            {"role": "tool", "tool_call_id": "call_1", "content": "line 1\nline 2"}
        ]

    def test_unknown_blocks_dropped(self) -> None:
        message = {"role": "user", "content": [{"type": "document", "source": {}}]}
        assert convert_to_openai_messages([message]) == []


class TestAssistantBlocks:
    def test_text_and_tool_use(self) -> None:
        message = {
            "role": "assistant",
            "content": [
                {"type": "text", "text": "Let me check."},
                {"type": "tool_use", "id": "call_1", "name": "read_file", "input": {"path": "a.txt"}},
            ],
        }
        out = convert_to_openai_messages([message])
        assert out == [
            {
                "role": "assistant",
                "content": "Let me check.",
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {
                            "name": "read_file",
                            "arguments": json.dumps({"path": "a.txt"}),
                        },
                    }
                ],
            }
        ]

    def test_tool_use_only(self) -> None:
        message = {
            "role": "assistant",
            "content": [{"type": "tool_use", "id": "c", "name": "ls", "input": {}}],
        }
        out = convert_to_openai_messages([message])
        assert out[0]["content"] is None
        assert out[0]["tool_calls"][0]["function"]["arguments"] == "{}"

    def test_multiple_text_blocks_joined(self) -> None:
        message = {
            "role": "assistant",
            "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}],
        }
        assert convert_to_openai_messages([message]) == [{"role": "assistant", "content": "a\nb"}]
