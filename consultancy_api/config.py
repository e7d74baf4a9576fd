import os
from dotenv import load_dotenv

load_dotenv(".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./consultancy.db")

JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_EXP_MINUTES = int(os.getenv("JWT_EXP_MINUTES", str(60 * 24)))  # 24 hours

ADMIN_EMAILS = set(
    e.strip().lower()
    for e in os.getenv("ADMIN_EMAILS", "").split(",")
    if e.strip()
)

EMBED_MODEL = os.getenv("EMBED_MODEL", "text-embedding-ada-002")
EMBED_INPUT_LIMIT = int(os.getenv("EMBED_INPUT_LIMIT", "8000"))
RAG_DOC_LIMIT = int(os.getenv("RAG_DOC_LIMIT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "*").split(",")
    if o.strip()
]

# Used by the client and the local indexing script
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
