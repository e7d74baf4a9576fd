import logging
from contextlib import asynccontextmanager
from typing import Dict, List

from fastapi import FastAPI, Depends, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from consultancy_api import ai_settings
from consultancy_api.auth import make_token, auth_user
from consultancy_api.chat import generate_reply
from consultancy_api.config import ADMIN_EMAILS, CORS_ORIGINS, LOG_LEVEL
from consultancy_api.content import router as content_router, seed_content
from consultancy_api.db import SessionLocal, create_tables, get_db
from consultancy_api.documents import ingest_document, list_documents, delete_document, extract_text
from consultancy_api.errors import ValidationError, NotFoundError, install_handlers
from consultancy_api.models import User
from consultancy_api.schemas import AiSettingsData, DocumentSummary, ModelOption

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    db = SessionLocal()
    try:
        seed_content(db)
    finally:
        db.close()
    logger.info("Consultancy API started")
    yield


app = FastAPI(title="Consultancy Site API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

install_handlers(app)
app.include_router(content_router, prefix="/content", tags=["Content"])


# ---------------------------
# Public endpoints
# ---------------------------
@app.get("/health")
def health():
    return {"ok": True}


@app.post("/auth/login")
def login(payload: dict, db: Session = Depends(get_db)):
    name = (payload.get("name") or "").strip()
    email = (payload.get("email") or "").strip().lower()
    if not name or not email:
        raise ValidationError("Name and email required")

    is_admin = email in ADMIN_EMAILS

    user = db.query(User).filter(User.email == email).first()
    if not user:
        user = User(name=name, email=email, is_admin=is_admin)
        db.add(user)
        db.commit()
        db.refresh(user)
    else:
        # upgrade admin if allowlisted
        if is_admin and not user.is_admin:
            user.is_admin = True
            db.commit()

    token = make_token(user.id, user.is_admin)
    return {
        "token": token,
        "user": {"id": user.id, "name": user.name, "email": user.email, "is_admin": user.is_admin},
    }


# ---------------------------
# Chat
# ---------------------------
@app.post("/chat")
def chat(payload: dict, me=Depends(auth_user), db: Session = Depends(get_db)):
    query = payload.get("query")
    if not isinstance(query, str) or not query:
        raise ValidationError("Invalid query")

    session_id = payload.get("sessionId")
    if not isinstance(session_id, str) or not session_id.strip():
        session_id = "default"

    response = generate_reply(db, me["user_id"], session_id, query)
    return {"response": response}


# ---------------------------
# Knowledge base
# ---------------------------
@app.post("/documents")
def process_document(payload: dict, me=Depends(auth_user), db: Session = Depends(get_db)):
    name = payload.get("name")
    content = payload.get("content")
    if not isinstance(name, str) or not name.strip() or not isinstance(content, str) or not content:
        raise ValidationError("Invalid document data")

    doc, has_embedding = ingest_document(db, me["user_id"], name.strip(), content)
    return {
        "success": True,
        "message": "Document processed and stored successfully",
        "id": doc.id,
        "hasEmbedding": has_embedding,
    }


@app.post("/documents/upload")
def upload_document(file: UploadFile = File(...), me=Depends(auth_user), db: Session = Depends(get_db)):
    if not file.filename:
        raise ValidationError("No filename provided")

    safe_name = file.filename.replace("/", "_").replace("\\", "_")
    content = extract_text(safe_name, file.file.read())
    if not content.strip():
        raise ValidationError("No text found in document")

    doc, has_embedding = ingest_document(db, me["user_id"], safe_name, content)
    return {
        "success": True,
        "message": "Document processed and stored successfully",
        "id": doc.id,
        "hasEmbedding": has_embedding,
    }


@app.get("/documents", response_model=List[DocumentSummary])
def documents(me=Depends(auth_user), db: Session = Depends(get_db)):
    return list_documents(db, me["user_id"])


@app.delete("/documents/{doc_id}")
def remove_document(doc_id: int, me=Depends(auth_user), db: Session = Depends(get_db)):
    if not delete_document(db, me["user_id"], doc_id):
        raise NotFoundError("Document not found")
    return {"ok": True}


# ---------------------------
# AI settings
# ---------------------------
@app.get("/settings/ai", response_model=AiSettingsData)
def get_ai_settings(me=Depends(auth_user), db: Session = Depends(get_db)):
    return ai_settings.load_settings(db, me["user_id"])


@app.put("/settings/ai", response_model=AiSettingsData)
def put_ai_settings(data: AiSettingsData, me=Depends(auth_user), db: Session = Depends(get_db)):
    if not data.api_key:
        raise ValidationError("Please enter a valid API key for the selected provider.")
    return ai_settings.save_settings(db, me["user_id"], data)


@app.get("/settings/ai/models", response_model=Dict[str, List[ModelOption]])
def model_options():
    return {provider.value: options for provider, options in ai_settings.MODEL_OPTIONS.items()}
