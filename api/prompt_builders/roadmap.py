"""Roadmap generator prompts and the generate_roadmap tool schema."""

from __future__ import annotations

from mentor.core.prompt_builder import build_from_template

ROADMAP_TOOL_NAME = "generate_roadmap"

TEMPLATE_ROADMAP_SYSTEM = """You are an expert curriculum designer and learning path architect. You must create roadmaps that are HIGHLY SPECIFIC to the exact domain requested, not generic learning advice.

For "{interest}" at "{level}" level:
- Beginner: Start with foundational concepts, terminology, and hands-on introductory exercises specific to {interest}. Include setup/tooling steps.
- Intermediate: Focus on deeper techniques, real-world projects, common pitfalls, and domain-specific best practices for {interest}.
- Advanced: Cover cutting-edge topics, optimization, architecture patterns, research papers, and expert-level challenges unique to {interest}.

Each milestone must include concrete, actionable resources (specific books, courses, tools, websites) relevant to {interest}. Never give generic advice like "practice more". Be precise."""

TEMPLATE_ROADMAP_USER = (
    'Create a detailed, domain-specific learning roadmap for mastering "{interest}" at the "{level}" level. '
    "Generate 6-8 milestones. Each milestone should have a clear title, a description explaining what the "
    "learner will achieve, and 2-3 specific resources (real tools, courses, books, or websites) tailored to {interest}."
)

ROADMAP_TOOL = {
    "type": "function",
    "function": {
        "name": ROADMAP_TOOL_NAME,
        "description": "Generate a structured learning roadmap with milestones",
        "parameters": {
            "type": "object",
            "properties": {
                "roadmap": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "description": {"type": "string"},
                            "resources": {"type": "array", "items": {"type": "string"}},
                        },
                        "required": ["title", "description", "resources"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["roadmap"],
            "additionalProperties": False,
        },
    },
}


def build_roadmap_messages(*, interest: str, level: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": build_from_template(TEMPLATE_ROADMAP_SYSTEM, interest=interest, level=level)},
        {"role": "user", "content": build_from_template(TEMPLATE_ROADMAP_USER, interest=interest, level=level)},
    ]
