import io
import logging
from typing import List, Optional, Tuple

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from consultancy_api.ai_settings import load_settings
from consultancy_api.errors import DependencyError, ValidationError
from consultancy_api.models import KnowledgeDoc
from consultancy_api.providers import embed_document

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = {
    "pdf": "application/pdf",
    "txt": "text/plain",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def document_type(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return DOCUMENT_TYPES.get(ext, "application/octet-stream")


def extract_text(filename: str, data: bytes) -> str:
    """Plain text of an uploaded PDF or text file."""
    kind = document_type(filename)
    if kind == "application/pdf":
        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError:
            raise ValidationError("Could not read PDF file")
        return "\n".join((page.extract_text() or "").strip() for page in reader.pages).strip()
    if kind == "text/plain":
        return data.decode("utf-8", errors="ignore")
    raise ValidationError("PDF and TXT files only")


def ingest_document(db: Session, user_id: int, name: str, content: str) -> Tuple[KnowledgeDoc, bool]:
    """
    Store a knowledge base document, with an embedding when the user has an
    OpenAI key. Returns the row and whether an embedding was produced.
    """
    settings = load_settings(db, user_id)
    embedding = embed_document(settings, content)

    doc = KnowledgeDoc(user_id=user_id, name=name, content=content, embedding=embedding)
    try:
        db.add(doc)
        db.commit()
        db.refresh(doc)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error storing document %r", name)
        raise DependencyError("Failed to store document")

    logger.info("Stored document %s (%d chars, embedding=%s)", doc.id, len(content), embedding is not None)
    return doc, embedding is not None


def list_documents(db: Session, user_id: int) -> List[dict]:
    rows = (
        db.query(KnowledgeDoc)
        .filter(KnowledgeDoc.user_id == user_id)
        .order_by(KnowledgeDoc.created_at.desc())
        .all()
    )
    return [
        {
            "id": r.id,
            "name": r.name,
            "size": len(r.content),
            "date": r.created_at.isoformat(),
            "type": document_type(r.name),
        }
        for r in rows
    ]


def delete_document(db: Session, user_id: int, doc_id: int) -> bool:
    """Delete only when the row belongs to user_id."""
    doc: Optional[KnowledgeDoc] = (
        db.query(KnowledgeDoc)
        .filter(KnowledgeDoc.id == doc_id, KnowledgeDoc.user_id == user_id)
        .first()
    )
    if not doc:
        return False
    db.delete(doc)
    db.commit()
    return True
