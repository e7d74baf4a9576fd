import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from consultancy_api.ai_settings import load_settings
from consultancy_api.config import RAG_DOC_LIMIT
from consultancy_api.errors import DependencyError
from consultancy_api.models import ChatMessage, KnowledgeDoc
from consultancy_api.providers import get_provider

logger = logging.getLogger(__name__)


def load_history(db: Session, user_id: int, session_id: str) -> List[ChatMessage]:
    try:
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.user_id == user_id, ChatMessage.session_id == session_id)
            .order_by(ChatMessage.created_at, ChatMessage.id)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching chat history for session %s", session_id)
        raise DependencyError("Failed to fetch chat history")


def store_message(db: Session, user_id: int, session_id: str, role: str, content: str) -> bool:
    """Best-effort insert; a failure is logged and reported as False."""
    try:
        db.add(ChatMessage(user_id=user_id, session_id=session_id, role=role, content=content))
        db.commit()
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error storing %s message for session %s", role, session_id)
        return False


def load_context_documents(db: Session, user_id: int) -> List[KnowledgeDoc]:
    # No ranking: the first few rows stand in for retrieval.
    try:
        return (
            db.query(KnowledgeDoc)
            .filter(KnowledgeDoc.user_id == user_id)
            .order_by(KnowledgeDoc.id)
            .limit(RAG_DOC_LIMIT)
            .all()
        )
    except SQLAlchemyError:
        logger.warning("Could not load knowledge base documents for user %s", user_id, exc_info=True)
        return []


def generate_reply(db: Session, user_id: int, session_id: str, query: str) -> str:
    """
    One chat turn: settings, history, store the query, optional document
    context, provider reply, store the reply.

    The two inserts are separate commits. If the provider fails the stored
    query is left without a reply.
    """
    settings = load_settings(db, user_id)
    history = load_history(db, user_id, session_id)

    store_message(db, user_id, session_id, "user", query)

    documents = load_context_documents(db, user_id) if settings.rag_enabled else []

    provider = get_provider(settings)
    logger.info(
        "Chat turn user=%s session=%s provider=%s history=%d docs=%d",
        user_id, session_id, provider.name, len(history), len(documents),
    )
    reply = provider.reply(settings, history, documents, query)

    store_message(db, user_id, session_id, "system", reply)
    return reply
