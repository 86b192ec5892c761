"""AI assistant: prompts per block type and answers turned into content.

The assistant never touches the block store. Callers pass the returned
content to ``BlockStore.update_content``; if the block was deleted while the
request was in flight, that call is a no-op.
"""

import dataclasses
import json
import threading
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from gift_builder.core.block import (
    BlockContent,
    NoteContent,
    PollContent,
    QuizContent,
    SecretContent,
    WisdomContent,
)
from gift_builder.core.serializer import ConfigSerializer
from gift_builder.errors import ExternalServiceError, ValidationError


class Generator(Protocol):
    def generate(
        self,
        prompt: str,
        want_json: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> str: ...


class AssistantKind(Enum):
    """Kinds of assistance, each tied to one block type."""

    NOTE = "note"
    RIDDLE = "riddle"
    QUIZ = "quiz"
    POLL = "poll"
    WISDOM = "wisdom"

    @property
    def wants_json(self) -> bool:
        return self in (AssistantKind.QUIZ, AssistantKind.POLL)


TONES = ("fun", "sweet", "poetic")


def build_prompt(
    kind: AssistantKind,
    user_input: str = "",
    tone: str = "fun",
    context: str = "",
) -> str:
    """Build the prompt sent to the model for ``kind``.

    ``user_input`` is the keywords or topic typed by the user; ``context`` is
    the riddle's answer.
    """
    if kind is AssistantKind.NOTE:
        return (
            f"Write a short, {tone} message for a gift website. "
            f"Keywords: {user_input or 'love'}. Max 3 sentences."
        )
    if kind is AssistantKind.RIDDLE:
        return f'Create a rhyming riddle for the answer "{context}". Do not reveal the answer.'
    if kind is AssistantKind.QUIZ:
        return (
            f'Generate a trivia question about "{user_input}". '
            'Return JSON: { "question": "...", "options": ["A", "B", "C", "D"], "correctIndex": 0 }'
        )
    if kind is AssistantKind.POLL:
        return (
            f'Generate a fun poll question about "{user_input}". '
            'Return JSON: { "question": "...", "options": ["Option 1", "Option 2"] }'
        )
    return (
        "Generate a short, inspiring daily quote or affirmation about "
        f"{user_input or 'friendship'}."
    )


def _parse_json(answer: str) -> Dict[str, Any]:
    try:
        data = json.loads(answer)
    except ValueError as e:
        raise ExternalServiceError("Failed to parse AI response. Please try again.") from e
    if not isinstance(data, dict):
        raise ExternalServiceError("Failed to parse AI response. Please try again.")
    return data


class AIAssistant:
    """Fills block content from a text generator.

    Parameters
    ----------
    generator : Generator
        Anything with ``generate(prompt, want_json, cancel_event)``, normally
        a :class:`~gift_builder.generation.LiteLLMGenerator`.
    serializer : ConfigSerializer, optional
        Checks JSON answers against the block content schema.

    Examples
    --------
    >>> assistant = AIAssistant(LiteLLMGenerator())
    >>> content = assistant.suggest(AssistantKind.NOTE, block.content, user_input="beach")
    >>> store.update_content(block.id, content)
    """

    def __init__(self, generator: Generator, serializer: Optional[ConfigSerializer] = None) -> None:
        self.generator = generator
        self.serializer = serializer or ConfigSerializer()

    def suggest(
        self,
        kind: AssistantKind,
        content: BlockContent,
        user_input: str = "",
        tone: str = "fun",
        cancel_event: Optional[threading.Event] = None,
    ) -> BlockContent:
        """Return a new content record with the generated answer applied.

        ``content`` is the block's current content; it is not modified.

        Raises
        ------
        ExternalServiceError
            Generation failed, timed out, was cancelled, or returned JSON
            that could not be parsed or does not fit the block.
        ValidationError
            ``kind`` does not apply to ``content``.
        """
        context = content.code if isinstance(content, SecretContent) else ""
        prompt = build_prompt(kind, user_input=user_input, tone=tone, context=context)
        answer = self.generator.generate(prompt, want_json=kind.wants_json, cancel_event=cancel_event)
        return self.apply(kind, content, answer)

    def apply(self, kind: AssistantKind, content: BlockContent, answer: str) -> BlockContent:
        """Merge a generated ``answer`` into a copy of ``content``."""
        if kind is AssistantKind.NOTE and isinstance(content, NoteContent):
            return dataclasses.replace(content, text=answer, extra=dict(content.extra))
        if kind is AssistantKind.RIDDLE and isinstance(content, SecretContent):
            return dataclasses.replace(content, hint=answer, extra=dict(content.extra))
        if kind is AssistantKind.WISDOM and isinstance(content, WisdomContent):
            return dataclasses.replace(
                content, quotes=[*content.quotes, answer], extra=dict(content.extra)
            )
        if kind is AssistantKind.QUIZ and isinstance(content, QuizContent):
            return self._merge_json(content, answer)
        if kind is AssistantKind.POLL and isinstance(content, PollContent):
            return self._merge_json(content, answer)
        raise ValidationError(
            f"{kind.value} assistance does not apply to {type(content).__name__}",
            context={"kind": kind.value, "content": type(content).__name__},
        )

    def _merge_json(self, content: BlockContent, answer: str) -> BlockContent:
        data = {**content.to_dict(), **_parse_json(answer)}
        type_tag = content.block_type.value
        try:
            self.serializer.validate_content(type_tag, data)
        except ValidationError as e:
            raise ExternalServiceError(
                "AI response did not match the block. Please try again.",
                context={"type": type_tag, "errors": e.context.get("errors", [])},
            ) from e
        return type(content).from_dict(data)
