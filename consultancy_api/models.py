from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, Float, ForeignKey, DateTime, Text, JSON

from consultancy_api.db import Base


def _now():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    is_admin = Column(Boolean, default=False)


class AiSettings(Base):
    __tablename__ = "ai_settings"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    provider = Column(String, nullable=False, default="openai")
    model = Column(String, nullable=False)
    api_key = Column(String, nullable=True)
    temperature = Column(Float, nullable=False, default=0.7)
    max_tokens = Column(Integer, nullable=False, default=1000)
    rag_enabled = Column(Boolean, nullable=False, default=True)
    system_prompt = Column(Text, nullable=False)


class ChatMessage(Base):
    __tablename__ = "chat_history"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    session_id = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)  # "user" or "system"
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)


class KnowledgeDoc(Base):
    __tablename__ = "knowledge_base_docs"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    embedding = Column(JSON, nullable=True)  # written on upload, never queried
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)


# ---------------------------
# Site content (admin panels)
# ---------------------------
class Service(Base):
    __tablename__ = "services"
    id = Column(String, primary_key=True)  # "ai", "xr", "multimedia"
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    video_url = Column(String, nullable=True)
    features = Column(JSON, nullable=False, default=list)
    position = Column(Integer, nullable=False, default=0)


class ContentSection(Base):
    __tablename__ = "content_sections"
    id = Column(String, primary_key=True)  # "hero", "about", "contact"
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    position = Column(Integer, nullable=False, default=0)


class PortfolioItem(Base):
    __tablename__ = "portfolio_items"
    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String, nullable=False)
    results = Column(JSON, nullable=False, default=list)  # [{"metric", "value"}]
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)


class BlogPost(Base):
    __tablename__ = "blog_posts"
    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    date = Column(String, nullable=False)  # YYYY-MM-DD
    author = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
