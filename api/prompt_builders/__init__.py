"""
Proxy prompt builders: system/user prompts and tool schemas sent to the gateway.
All prompt content lives here; services only assemble requests.
"""

from api.prompt_builders.chat import build_chat_system_prompt
from api.prompt_builders.quiz import QUIZ_TOOL, QUIZ_TOOL_NAME, build_quiz_messages
from api.prompt_builders.roadmap import ROADMAP_TOOL, ROADMAP_TOOL_NAME, build_roadmap_messages

__all__ = [
    "build_chat_system_prompt",
    "QUIZ_TOOL",
    "QUIZ_TOOL_NAME",
    "build_quiz_messages",
    "ROADMAP_TOOL",
    "ROADMAP_TOOL_NAME",
    "build_roadmap_messages",
]
