"""
Chat service - the global hockey chat, stored on the device only.
Also keeps the unread counter behind the chat tab badge.
"""

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from core.domain.constants import LOCAL_CHAT_MESSAGES_KEY, UNREAD_HELP_COUNT_KEY
from core.domain.models import ChatMessage
from core.domain.seed import default_chat_messages
from core.utils.json_cache import JsonCache

logger = logging.getLogger(__name__)


class ChatService:
    """Local chat message store and unread counter"""

    def __init__(self, cache: JsonCache):
        self.cache = cache

    def _parse(self, rows: List[dict]) -> List[ChatMessage]:
        messages = []
        for row in rows:
            try:
                messages.append(ChatMessage.model_validate(row))
            except ValidationError:
                logger.warning(f"[CHAT] Skipping malformed message {row.get('id')!r}")
        return messages

    async def get_messages(self, viewer_id: str) -> List[ChatMessage]:
        """Stored messages oldest first; first run stores two welcome messages"""
        rows = await self.cache.read_list(LOCAL_CHAT_MESSAGES_KEY)
        if rows is None:
            rows = default_chat_messages(viewer_id)
            await self.cache.write(LOCAL_CHAT_MESSAGES_KEY, rows)
        return sorted(self._parse(rows), key=lambda m: m.created_at)

    async def send_message(
        self,
        sender_id: str,
        sender_name: str,
        text: str,
        sender_email: str = "",
        is_admin: bool = False,
    ) -> Optional[ChatMessage]:
        """Append a message. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        message = ChatMessage(
            id=str(int(time.time() * 1000)),
            sender_id=sender_id,
            sender_name=sender_name,
            sender_email=sender_email,
            message=text,
            is_admin=is_admin,
            created_at=datetime.now(timezone.utc),
            read_by_ids=[sender_id],
        )
        if not await self.cache.append(LOCAL_CHAT_MESSAGES_KEY, message.to_row()):
            return None
        return message

    # === Unread badge ===

    async def get_unread_count(self) -> int:
        raw = await self.cache.read_text(UNREAD_HELP_COUNT_KEY)
        try:
            return int(raw) if raw is not None else 0
        except ValueError:
            return 0

    async def set_unread_count(self, count: int) -> None:
        await self.cache.write_text(UNREAD_HELP_COUNT_KEY, str(max(0, count)))

    async def increment_unread_count(self) -> int:
        count = await self.get_unread_count() + 1
        await self.set_unread_count(count)
        return count

    async def reset_unread_count(self) -> None:
        await self.set_unread_count(0)
