# pathwise/api/v1/chats.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import ChatCreate, ChatMessagePost
from pathwise.models.entities import Chat, ChatMessage
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["chats"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _require_mode_allowed(mode: str, user: SessionUser) -> None:
    if mode == "enhanced" and user.membership != "premium":
        raise HTTPException(status_code=403, detail="Enhanced chat requires a premium membership")


async def _assistant_reply(messages: List[ChatMessage], mode: str, user: SessionUser, store: MemStore) -> ChatMessage:
    convo: List[Dict[str, Any]] = [{"role": m.role, "content": m.content} for m in messages]
    content, provider = await advisor.generate_chat_response(convo, mode, store.get_user(user.id))
    return ChatMessage(role="assistant", content=content, timestamp=_now_iso(), ai_provider=provider)


@router.get("", response_model=List[Chat])
async def list_chats(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.list_chats_by_user(user.id)


@router.get("/{chat_id}", response_model=Chat)
async def get_chat(chat_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return owned(store.get_chat(chat_id), user, "Chat")


@router.post("", response_model=Chat, status_code=201)
async def create_chat(payload: ChatCreate, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    _require_mode_allowed(payload.chat_mode, user)
    messages = [
        ChatMessage(role=m.role, content=m.content, timestamp=m.timestamp or _now_iso())
        for m in payload.messages
    ]
    # a conversation opened with a question gets its answer straight away
    if messages and messages[-1].role == "user":
        messages.append(await _assistant_reply(messages, payload.chat_mode, user, store))
    return store.create_chat({
        "user_id": user.id,
        "title": payload.title,
        "messages": messages,
        "chat_mode": payload.chat_mode,
    })


@router.post("/{chat_id}/message", response_model=Chat)
async def post_message(
    chat_id: int,
    payload: ChatMessagePost,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    chat = owned(store.get_chat(chat_id), user, "Chat")
    mode = payload.chat_mode or chat.chat_mode
    _require_mode_allowed(mode, user)

    messages = list(chat.messages)
    messages.append(ChatMessage(role="user", content=payload.content, timestamp=_now_iso()))
    messages.append(await _assistant_reply(messages, mode, user, store))
    logger.debug("Chat %s now has %d messages", chat_id, len(messages))
    # the stored chat only changes once the reply is in hand
    return store.update_chat(chat_id, {"messages": messages, "chat_mode": mode})


def record_advisor_chat(store: MemStore, user_id: int, title: str, prompt: str, reply: str, provider: Optional[str]) -> Chat:
    """Persist a one-shot advisor exchange as a chat."""
    now = _now_iso()
    return store.create_chat({
        "user_id": user_id,
        "title": title,
        "messages": [
            ChatMessage(role="user", content=prompt, timestamp=now),
            ChatMessage(role="assistant", content=reply, timestamp=now, ai_provider=provider),
        ],
        "chat_mode": "standard",
    })
