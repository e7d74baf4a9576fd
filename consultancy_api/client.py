"""
HTTP client for the site: chat, knowledge base and AI settings.

Session identity and credentials are passed in explicitly instead of being
read from browser storage.
"""
import itertools
import logging
import time
from typing import List, Optional

import requests

from consultancy_api.config import API_BASE_URL

logger = logging.getLogger(__name__)

FAILED_RESPONSE = "Failed to generate response. Please check your API settings and try again."
NOT_LOGGED_IN = "I'd provide information based on the company documents, but you need to be logged in first."
NO_RESPONSE = "Sorry, I couldn't generate a response at this time."

DEFAULT_AI_SETTINGS = {
    "provider": "openai",
    "model": "gpt-4o-mini",
    "apiKey": "",
    "temperature": 0.7,
    "maxTokens": 1000,
    "ragEnabled": True,
    "systemPrompt": "You are a helpful assistant for Alexander Oguso Digital Transformation Consultancy.",
}


class ChatClientError(Exception):
    pass


class ChatSession:
    """Identifier grouping chat turns; created once and reused."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or f"session-{int(time.time() * 1000)}"


class ApiClient:
    def __init__(self, base_url: str = API_BASE_URL, token: Optional[str] = None,
                 session: Optional[ChatSession] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or ChatSession()
        self.timeout = timeout

    def _headers(self):
        return {"Authorization": f"Bearer {self.token}"}

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # ---- chat ----
    def generate_response(self, query: str) -> str:
        if not self.token:
            return NOT_LOGGED_IN

        try:
            res = requests.post(
                self._url("/chat"),
                json={"query": query, "sessionId": self.session.session_id},
                headers=self._headers(),
                timeout=self.timeout,
            )
            res.raise_for_status()
            data = res.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error generating response: %s", e)
            raise ChatClientError(FAILED_RESPONSE) from e

        if not isinstance(data, dict):
            logger.error("Unexpected chat response body: %r", data)
            raise ChatClientError(FAILED_RESPONSE)
        return data.get("response") or NO_RESPONSE

    # ---- knowledge base ----
    def upload_document(self, name: str, content: str) -> bool:
        if not self.token:
            logger.warning("Not authenticated: cannot upload documents")
            return False
        try:
            res = requests.post(
                self._url("/documents"),
                json={"name": name, "content": content},
                headers=self._headers(),
                timeout=self.timeout,
            )
            data = res.json()
        except (requests.RequestException, ValueError):
            logger.exception("Error uploading document")
            return False

        if not res.ok or not data.get("success"):
            logger.error("Error uploading document: %s", data.get("error"))
            return False
        return True

    def list_documents(self) -> List[dict]:
        if not self.token:
            return []
        try:
            res = requests.get(self._url("/documents"), headers=self._headers(), timeout=self.timeout)
            res.raise_for_status()
            return res.json()
        except (requests.RequestException, ValueError):
            logger.exception("Error loading documents")
            return []

    def delete_document(self, doc_id: int) -> bool:
        if not self.token:
            logger.warning("Not authenticated: cannot delete documents")
            return False
        try:
            res = requests.delete(self._url(f"/documents/{doc_id}"), headers=self._headers(), timeout=self.timeout)
        except requests.RequestException:
            logger.exception("Error deleting document")
            return False
        if not res.ok:
            logger.error("Error deleting document %s: HTTP %s", doc_id, res.status_code)
        return res.ok

    # ---- settings ----
    def get_ai_settings(self) -> dict:
        if not self.token:
            return dict(DEFAULT_AI_SETTINGS)
        try:
            res = requests.get(self._url("/settings/ai"), headers=self._headers(), timeout=self.timeout)
            res.raise_for_status()
            return res.json()
        except (requests.RequestException, ValueError):
            logger.exception("Error loading AI settings")
            return dict(DEFAULT_AI_SETTINGS)

    def save_ai_settings(self, settings: dict) -> bool:
        if not self.token:
            logger.warning("Not authenticated: cannot save settings")
            return False
        try:
            res = requests.put(self._url("/settings/ai"), json=settings, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException:
            logger.exception("Error saving AI settings")
            return False
        if not res.ok:
            logger.error("Error saving AI settings: HTTP %s", res.status_code)
        return res.ok


# ---------------------------
# Transcript (what the chat window shows)
# ---------------------------
WELCOME_MESSAGES = [
    {
        "id": "1",
        "type": "system",
        "content": (
            "Welcome to Alexander Oguso Digital Transformation. We leverage cutting-edge AI, XR, "
            "and multimedia solutions to help businesses innovate, adapt, and thrive in an "
            "increasingly digital world."
        ),
    },
    {
        "id": "2",
        "type": "system",
        "content": "How can I help you today?",
    },
]

LOADING_TEXT = "Searching knowledge base..."
ERROR_TEXT = "I'm sorry, I couldn't process your request. Please try again."


class ChatTranscript:
    def __init__(self, client: ApiClient):
        self.client = client
        self.messages = [dict(m) for m in WELCOME_MESSAGES]
        self.is_loading = False
        self.last_error: Optional[str] = None
        self._ids = itertools.count(int(time.time() * 1000))

    def _next_id(self) -> str:
        return str(next(self._ids))

    def send_message(self, text: str):
        if not text.strip():
            return

        self.messages.append({"id": self._next_id(), "type": "user", "content": text})

        loading_id = self._next_id()
        self.messages.append({"id": loading_id, "type": "system", "content": LOADING_TEXT, "is_loading": True})
        self.is_loading = True
        self.last_error = None

        try:
            reply = self.client.generate_response(text)
        except ChatClientError as e:
            self.last_error = str(e)
            self._replace(loading_id, ERROR_TEXT)
        else:
            self._replace(loading_id, reply)
        finally:
            self.is_loading = False

    def _replace(self, message_id: str, content: str):
        self.messages = [
            {"id": message_id, "type": "system", "content": content} if m["id"] == message_id else m
            for m in self.messages
        ]
