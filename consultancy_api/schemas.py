from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # The site sends camelCase keys (apiKey, maxTokens, videoUrl, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------------------
# AI settings
# ---------------------------
class AiProvider(str, Enum):
    openai = "openai"
    anthropic = "anthropic"
    perplexity = "perplexity"
    groq = "groq"
    deepseek = "deepseek"
    openrouter = "openrouter"


class AiSettingsData(CamelModel):
    provider: AiProvider = AiProvider.openai
    model: str = "gpt-4o-mini"
    api_key: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, gt=0)
    rag_enabled: bool = True
    system_prompt: str = "You are a helpful assistant for Alexander Oguso Digital Transformation Consultancy."


class ModelOption(BaseModel):
    value: str
    label: str


# ---------------------------
# Knowledge base
# ---------------------------
class DocumentSummary(BaseModel):
    id: int
    name: str
    size: int
    date: str
    type: str


# ---------------------------
# Site content
# ---------------------------
class ServiceData(CamelModel):
    id: str = Field(min_length=1)
    title: str
    description: str = ""
    video_url: Optional[str] = None
    features: List[str] = []


class ContentSectionData(CamelModel):
    id: str = Field(min_length=1)
    title: str
    content: str = ""


class PortfolioResult(BaseModel):
    metric: str = Field(min_length=1)
    value: str = Field(min_length=1)


class PortfolioItemIn(CamelModel):
    title: str = Field(min_length=3)
    category: str = Field(min_length=2)
    description: str = Field(min_length=10)
    image: HttpUrl
    results: List[PortfolioResult] = Field(min_length=3, max_length=3)


class PortfolioItemOut(CamelModel):
    id: int
    title: str
    category: str
    description: str
    image: str
    results: List[PortfolioResult]


class BlogPostIn(CamelModel):
    title: str
    slug: str = ""
    excerpt: str = ""
    content: str
    date: Optional[str] = None
    author: str = "Alexander Oguso"
    image_url: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title and content are required fields.")
        return v


class BlogPostOut(CamelModel):
    id: int
    title: str
    slug: str
    excerpt: str
    content: str
    date: str
    author: str
    image_url: Optional[str] = None
