"""GuideAssistant — LLM-powered tour guide chatting about the brick scene."""

import logging
import os
from typing import List, Optional, Sequence

from openai import AsyncOpenAI

from .models import ChatMessage, SceneTime
from .scene import scene_context

logger = logging.getLogger(__name__)

DEFAULT_GUIDE_MODEL = os.environ.get("GUIDE_MODEL", "gpt-4o-mini")
DEFAULT_GUIDE_TIMEOUT = float(os.environ.get("GUIDE_TIMEOUT", "30"))

MISSING_KEY_MESSAGE = "Please provide a valid API_KEY in the environment to chat with the guide."
EMPTY_REPLY_MESSAGE = "I'm having trouble finding that brick of information right now."
CONNECTION_LOST_MESSAGE = "Sorry, I lost my connection to the history books!"

SYSTEM_PROMPT = """You are a knowledgeable and enthusiastic tour guide at the Great Wall of China.
The user is viewing a 3D LEGO rendering of the wall.
Keep your answers concise (under 100 words), fun, and educational.
You are specifically a "Lego Minifigure Historian".
Current Scene Context: {context}"""

_ROLE_MAP = {"user": "user", "model": "assistant"}


def _resolve_api_key(api_key: Optional[str]) -> str:
    if api_key is not None:
        return api_key.strip()
    return (os.environ.get("API_KEY") or os.environ.get("OPENAI_API_KEY") or "").strip()


def welcome_message(time_of_day: SceneTime) -> ChatMessage:
    time_of_day = SceneTime(time_of_day)
    return ChatMessage(
        role="model",
        text=(f"Welcome to the Great Wall! I am your Lego Historian. It is currently "
              f"{time_of_day.value} time here. Ask me anything about the wall's "
              f"construction, history, or myths!"),
    )


class GuideAssistant:
    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_GUIDE_MODEL,
                 timeout: float = DEFAULT_GUIDE_TIMEOUT, client=None):
        """
        api_key: credential for the hosted model; falls back to the
            ``API_KEY`` then ``OPENAI_API_KEY`` environment variables.
        client: pre-built async client (mainly for tests).
        """
        self.api_key = _resolve_api_key(api_key)
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key) or self._client is not None

    def _get_client(self):
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def build_messages(self, history: Sequence[ChatMessage], context: str) -> List[dict]:
        messages = [{"role": "system", "content": SYSTEM_PROMPT.format(context=context)}]
        for msg in history:
            messages.append({"role": _ROLE_MAP.get(msg.role, "user"), "content": msg.text})
        return messages

    async def reply(self, history: Sequence[ChatMessage], context: str) -> str:
        """Ask the guide for the next turn.  Always returns displayable text."""
        if not self.has_credential:
            logger.warning("No API key configured for the guide")
            return MISSING_KEY_MESSAGE

        try:
            completion = await self._get_client().chat.completions.create(
                model=self.model,
                messages=self.build_messages(history, context),
            )
            text = completion.choices[0].message.content if completion.choices else None
            return text or EMPTY_REPLY_MESSAGE
        except Exception as e:
            logger.error(f"Guide API error: {e}")
            return CONNECTION_LOST_MESSAGE


class GuideSession:
    """Chat history for one viewer, with stale-reply protection.

    Each ``ask`` takes a sequence number; a reply that comes back after a
    newer question was asked is dropped instead of being appended out of
    order.
    """

    def __init__(self, assistant: GuideAssistant, time_of_day: SceneTime = SceneTime.DAY):
        self.assistant = assistant
        self.time_of_day = SceneTime(time_of_day)
        self.history: List[ChatMessage] = [welcome_message(self.time_of_day)]
        self._sequence = 0

    async def ask(self, text: str) -> Optional[str]:
        if not text or not text.strip():
            return None

        self.history.append(ChatMessage(role="user", text=text))
        self._sequence += 1
        ticket = self._sequence

        reply = await self.assistant.reply(list(self.history), scene_context(self.time_of_day))

        if ticket != self._sequence:
            logger.info(f"Discarding stale guide reply #{ticket} (latest #{self._sequence})")
            return None
        self.history.append(ChatMessage(role="model", text=reply))
        return reply
