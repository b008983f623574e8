"""Quiz generator prompts and the generate_quiz tool schema."""

from __future__ import annotations

from mentor.core.prompt_builder import build_from_template

QUIZ_QUESTION_COUNT = 5
QUIZ_TOOL_NAME = "generate_quiz"

TEMPLATE_QUIZ_SYSTEM = (
    "You are a quiz generator for {interest} at {level} level. "
    "Generate challenging but fair multiple-choice questions."
)
TEMPLATE_QUIZ_USER = (
    "Generate {count} multiple-choice quiz questions about {interest} for a {level} learner. "
    "Pick a specific subtopic."
)

QUIZ_TOOL = {
    "type": "function",
    "function": {
        "name": QUIZ_TOOL_NAME,
        "description": "Generate quiz questions with answers",
        "parameters": {
            "type": "object",
            "properties": {
                "topic": {"type": "string", "description": "The specific subtopic of the quiz"},
                "questions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "question": {"type": "string"},
                            "options": {"type": "array", "items": {"type": "string"}},
                            "correct": {"type": "number", "description": "Zero-based index of correct option"},
                            "explanation": {"type": "string"},
                        },
                        "required": ["question", "options", "correct", "explanation"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["topic", "questions"],
            "additionalProperties": False,
        },
    },
}


def build_quiz_messages(*, interest: str, level: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": build_from_template(TEMPLATE_QUIZ_SYSTEM, interest=interest, level=level)},
        {
            "role": "user",
            "content": build_from_template(
                TEMPLATE_QUIZ_USER, interest=interest, level=level, count=QUIZ_QUESTION_COUNT
            ),
        },
    ]
