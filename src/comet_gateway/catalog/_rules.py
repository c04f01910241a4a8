"""Identifier heuristics for models the gateway lists without metadata.

The gateway's ``/models`` endpoint usually returns little more than an id,
so capabilities are guessed from well-known family names. The tables here
are data; :func:`classify_model` is the only code that walks them.
"""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONTEXT_WINDOW = 8192

# Image, speech, video and audio generators (case-insensitive).
NON_TEXT_PREFIXES: tuple[str, ...] = ("tts", "mj_", "veo", "runway", "suno", "kling_")
NON_TEXT_PATTERNS: tuple[str, ...] = (
    "dall-e",
    "dalle",
    "midjourney",
    "stable-diffusion",
    "sd-",
    "flux-",
    "playground-v",
    "ideogram",
    "recraft",
    "black-forest-labs",
)


@dataclass(frozen=True)
class FamilyRule:
    """Overrides applied when every substring in ``patterns`` is in the id.

    Fields left as ``None`` keep the synthesized default.
    """

    patterns: tuple[str, ...]
    context_window: int | None = None
    supports_images: bool | None = None
    description: str | None = None

    def matches(self, model_id: str) -> bool:
        return all(p in model_id for p in self.patterns)


# Evaluated top to bottom, first match wins. More specific variants of a
# family must precede the family's general rule.
FAMILY_RULES: tuple[FamilyRule, ...] = (
    # Claude
    FamilyRule(("claude", "3-5-sonnet"), 200_000, True, "Claude 3.5 Sonnet - Advanced reasoning and code generation"),
    FamilyRule(("claude", "3-5-haiku"), 200_000, True, "Claude 3.5 Haiku - Fast and efficient responses"),
    FamilyRule(("claude", "claude-3"), 200_000, True, "Claude 3 series - Advanced AI assistant"),
    FamilyRule(("claude",)),
    # GPT
    FamilyRule(("gpt-4", "4o"), 128_000, True, "GPT-4o - Optimized for speed and cost"),
    FamilyRule(("gpt-4", "vision"), 128_000, True, "GPT-4 - Advanced language model"),
    FamilyRule(("gpt-4",), 128_000, False, "GPT-4 - Advanced language model"),
    FamilyRule(("gpt-3.5",), 16_385, None, "GPT-3.5 Turbo - Fast and capable"),
    # Qwen
    FamilyRule(("qwen", "coder"), 32_768, None, "Qwen Coder - Alibaba's language model"),
    FamilyRule(("qwen",), 32_768, None, "Qwen - Alibaba's language model"),
    # Minimax
    FamilyRule(("abab",), 245_760, None, "Minimax Abab - Chinese-optimized language model"),
    # Gemini
    FamilyRule(("gemini", "pro"), 2_097_152, True, "Google Gemini - Multimodal AI model"),
    FamilyRule(("gemini",), 1_048_576, True, "Google Gemini - Multimodal AI model"),
    # Llama
    FamilyRule(("llama", "3.1"), 131_072, None, "Meta Llama - Open source language model"),
    FamilyRule(("llama",), 8192, None, "Meta Llama - Open source language model"),
    # Others
    FamilyRule(("mistral",), 32_768, None, "Mistral AI - European AI excellence"),
    FamilyRule(("yi-",), 200_000, None, "01.AI Yi - Bilingual AI model"),
    FamilyRule(("deepseek",), 64_000, None, "DeepSeek - Code and reasoning specialist"),
)


@dataclass(frozen=True)
class Classification:
    context_window: int
    supports_images: bool
    description: str


def is_text_generation_model(model_id: str) -> bool:
    """Return ``False`` for image, speech, video and audio generators."""
    lowered = model_id.lower()
    if lowered.startswith(NON_TEXT_PREFIXES):
        return False
    return not any(p in lowered for p in NON_TEXT_PATTERNS)


def classify_model(
    model_id: str, rules: tuple[FamilyRule, ...] = FAMILY_RULES
) -> Classification:
    """Best-effort capability guess for *model_id*.

    Unrecognized families keep the defaults: an 8192-token window, no image
    support, and the raw id as description.
    """
    context_window = DEFAULT_CONTEXT_WINDOW
    supports_images = False
    description = model_id

    lowered = model_id.lower()
    rule = next((r for r in rules if r.matches(lowered)), None)
    if rule is not None:
        if rule.context_window is not None:
            context_window = rule.context_window
        if rule.supports_images is not None:
            supports_images = rule.supports_images
        if rule.description is not None:
            description = rule.description

    return Classification(context_window, supports_images, description)
