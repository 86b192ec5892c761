"""AI text generation for block content."""

from gift_builder.generation.assistant import AIAssistant, AssistantKind
from gift_builder.generation.litellm_generator import LiteLLMGenerator

__all__ = [
    "AIAssistant",
    "AssistantKind",
    "LiteLLMGenerator",
]
