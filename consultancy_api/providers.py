"""
Reply strategies, one per configured provider.

Only OpenAI is wired to a real API. A user without an api key gets the
simulated reply; any other provider gets the simulated reply prefixed with a
"not implemented" note.
"""
import logging
from typing import List, Optional

from openai import OpenAI

from consultancy_api.config import EMBED_MODEL, EMBED_INPUT_LIMIT
from consultancy_api.errors import ProviderError
from consultancy_api.schemas import AiProvider, AiSettingsData

logger = logging.getLogger(__name__)


def simulate_response(query: str, documents: list) -> str:
    lower_query = query.lower()
    response = "Based on my analysis"

    if documents:
        response += " of your knowledge base"

    response += (
        ", Alexander Oguso offers comprehensive digital transformation services"
        " including AI solutions, XR experiences, and multimedia content creation."
    )

    if "ai" in lower_query:
        response += " Our AI solutions include custom models, predictive analytics, and machine learning implementations."
    if "xr" in lower_query:
        response += " Our XR experiences provide immersive AR and VR applications for customer engagement and employee training."
    if "multimedia" in lower_query:
        response += " Our multimedia content includes interactive presentations, data visualizations, and engaging digital storytelling."

    response += " Would you like more specific information about any of these services?"
    return response


def build_messages(settings: AiSettingsData, history: list, documents: list, query: str) -> List[dict]:
    """
    System prompt, optional document context, every prior turn, then the query.
    History is passed whole; nothing is trimmed to fit the model's context.
    """
    messages = [{"role": "system", "content": settings.system_prompt}]

    if documents:
        context = "\n\n".join(f"Document: {d.name}\nContent: {d.content}" for d in documents)
        messages.append({
            "role": "system",
            "content": f"Here are some relevant documents from the knowledge base:\n\n{context}",
        })

    for msg in history:
        # stored replies carry role "system"; sent as "assistant", not forwarded as stored
        role = "user" if msg.role == "user" else "assistant"
        messages.append({"role": role, "content": msg.content})

    messages.append({"role": "user", "content": query})
    return messages


class ChatProvider:
    name = "base"

    def reply(self, settings: AiSettingsData, history: list, documents: list, query: str) -> str:
        raise NotImplementedError


class SimulatedProvider(ChatProvider):
    name = "simulated"

    def reply(self, settings, history, documents, query):
        return simulate_response(query, documents)


class OpenAIProvider(ChatProvider):
    name = AiProvider.openai.value

    def reply(self, settings, history, documents, query):
        client = OpenAI(api_key=settings.api_key)
        try:
            completion = client.chat.completions.create(
                model=settings.model,
                messages=build_messages(settings, history, documents, query),
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            )
            content = completion.choices[0].message.content
        except Exception as e:
            raise ProviderError(self.name, e) from e

        return content or "No response generated."


class UnimplementedProvider(ChatProvider):
    def __init__(self, provider: str):
        self.name = provider

    def reply(self, settings, history, documents, query):
        note = f"Provider {self.name} is not fully implemented yet. Using simulated response."
        return note + "\n\n" + simulate_response(query, documents)


def get_provider(settings: AiSettingsData) -> ChatProvider:
    if not settings.api_key:
        return SimulatedProvider()
    if settings.provider == AiProvider.openai:
        return OpenAIProvider()
    return UnimplementedProvider(settings.provider.value)


def embed_document(settings: AiSettingsData, content: str) -> Optional[List[float]]:
    """
    Embedding of the first EMBED_INPUT_LIMIT characters, or None.
    Longer content is cut without notice; failures are logged and swallowed.
    """
    if not settings.api_key or settings.provider != AiProvider.openai:
        return None

    try:
        client = OpenAI(api_key=settings.api_key)
        res = client.embeddings.create(model=EMBED_MODEL, input=content[:EMBED_INPUT_LIMIT])
    except Exception:
        logger.exception("Error generating embedding")
        return None

    if res.data:
        return list(res.data[0].embedding)
    return None
