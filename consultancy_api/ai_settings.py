import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from consultancy_api.errors import DependencyError
from consultancy_api.models import AiSettings
from consultancy_api.schemas import AiProvider, AiSettingsData

logger = logging.getLogger(__name__)

# Offered per provider in the settings form; not enforced server-side.
MODEL_OPTIONS = {
    AiProvider.openai: [
        {"value": "gpt-4o-mini", "label": "GPT-4o Mini"},
        {"value": "gpt-4o", "label": "GPT-4o"},
    ],
    AiProvider.anthropic: [
        {"value": "claude-3-haiku-20240307", "label": "Claude 3 Haiku"},
        {"value": "claude-3-sonnet-20240229", "label": "Claude 3 Sonnet"},
        {"value": "claude-3-opus-20240229", "label": "Claude 3 Opus"},
    ],
    AiProvider.perplexity: [
        {"value": "mixtral-8x7b-instruct", "label": "Mixtral 8x7B"},
        {"value": "llama-3-sonar-small-128k", "label": "Llama 3 Sonar Small"},
        {"value": "llama-3-sonar-large-128k", "label": "Llama 3 Sonar Large"},
    ],
    AiProvider.groq: [
        {"value": "llama-3.1-8b-instant", "label": "Llama 3.1 8B Instant"},
        {"value": "llama-3.3-70b-versatile", "label": "Llama 3.3 70B Versatile"},
    ],
    AiProvider.deepseek: [
        {"value": "deepseek-chat", "label": "DeepSeek Chat"},
        {"value": "deepseek-reasoner", "label": "DeepSeek Reasoner"},
    ],
    AiProvider.openrouter: [
        {"value": "openai/gpt-4o-mini", "label": "GPT-4o Mini (OpenRouter)"},
        {"value": "meta-llama/llama-3.1-8b-instruct", "label": "Llama 3.1 8B (OpenRouter)"},
    ],
}


def default_settings() -> AiSettingsData:
    return AiSettingsData()


def to_data(row: AiSettings) -> AiSettingsData:
    return AiSettingsData(
        provider=row.provider,
        model=row.model,
        api_key=row.api_key or "",
        temperature=row.temperature,
        max_tokens=row.max_tokens,
        rag_enabled=row.rag_enabled,
        system_prompt=row.system_prompt,
    )


def load_settings(db: Session, user_id: int) -> AiSettingsData:
    """
    The caller's settings, or the defaults when no row exists yet.
    Raises DependencyError when the store cannot be read.
    """
    try:
        row = db.query(AiSettings).filter(AiSettings.user_id == user_id).first()
    except SQLAlchemyError:
        logger.exception("Error fetching AI settings for user %s", user_id)
        raise DependencyError("Failed to fetch AI settings")

    if row is None:
        logger.info("No AI settings for user %s, using defaults", user_id)
        return default_settings()
    return to_data(row)


def save_settings(db: Session, user_id: int, data: AiSettingsData) -> AiSettingsData:
    """Wholesale upsert; last write wins."""
    row = db.query(AiSettings).filter(AiSettings.user_id == user_id).first()
    if row is None:
        row = AiSettings(user_id=user_id)
        db.add(row)

    row.provider = data.provider.value
    row.model = data.model
    row.api_key = data.api_key
    row.temperature = data.temperature
    row.max_tokens = data.max_tokens
    row.rag_enabled = data.rag_enabled
    row.system_prompt = data.system_prompt

    db.commit()
    db.refresh(row)
    return to_data(row)
