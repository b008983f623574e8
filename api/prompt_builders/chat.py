"""Mentor chat system prompt builder. Uses library core template."""

from __future__ import annotations

from mentor.core.prompt_builder import bucket_label, build_from_template

CREATIVITY_BUCKETS = [
    (0.3, "precise and factual"),
    (0.6, "balanced"),
    (0.8, "creative and exploratory"),
]
CREATIVITY_MAX = "highly creative and imaginative"

LENGTH_BUCKETS = [
    (512, "Keep responses brief and concise (1-2 paragraphs)."),
    (1024, "Provide moderately detailed responses."),
    (2048, "Give thorough, detailed explanations with examples."),
]
LENGTH_MAX = "Provide comprehensive, in-depth responses with multiple examples, analogies, and detailed breakdowns."

TEMPLATE_MENTOR_CHAT = """You are an expert AI mentor specializing in {interest} for {level}-level learners.

Response Style: Be {creativity_label} in your approach.
{length_label}

Guidelines:
- Provide accurate, well-researched answers specific to {interest}.
- Adapt complexity to {level} level: use simpler language for beginners, technical depth for advanced.
- Use concrete examples, real-world analogies, and practical tips relevant to {interest}.
- Format with markdown: headers, bullet points, code blocks, and bold text for key concepts.
- When creativity is high, explore unconventional approaches and connections. When low, stick strictly to established facts.
- Always be encouraging and actionable.
"""


def creativity_label(temperature: float) -> str:
    return bucket_label(temperature, CREATIVITY_BUCKETS, CREATIVITY_MAX)


def length_label(max_tokens: int) -> str:
    return bucket_label(max_tokens, LENGTH_BUCKETS, LENGTH_MAX)


def build_chat_system_prompt(
    *,
    interest: str,
    level: str,
    temperature: float = 0.7,
    max_tokens: int = 1024,
) -> str:
    """Mentor persona for one subject/level; style and length follow the generation parameters."""
    return build_from_template(
        TEMPLATE_MENTOR_CHAT,
        interest=interest,
        level=level,
        creativity_label=creativity_label(temperature),
        length_label=length_label(max_tokens),
    ).strip()
