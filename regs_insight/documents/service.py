
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.errors import Forbidden, NotFound, ValidationError
from regs_insight.models.document import Document
from regs_insight.models.user import User
from regs_insight.uploads.storage import BlobStorage, StoredBlob

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 200


@dataclass
class DeleteOutcome:
    document_id: int
    # cleanup is attempted on every delete; the result never fails the request
    blob_removed: bool


def parse_date(value: str | None, field: str) -> date | None:
    """ISO `YYYY-MM-DD`; empty means absent."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"{field} must be YYYY-MM-DD")


async def insert_document(
    db: AsyncSession,
    owner_id: int,
    blob: StoredBlob | None,
    name: str | None = None,
    doc_type: str | None = None,
    doc_date: date | None = None,
) -> Document:
    if blob is None:
        raise ValidationError("file required")
    doc = Document(
        user_id=owner_id,
        document_name=name or blob.original_filename,
        document_type=doc_type or None,
        document_date=doc_date,
        file_path=blob.file_path,
        original_filename=blob.original_filename,
    )
    db.add(doc)
    await db.commit()
    await db.refresh(doc)
    return doc


async def list_documents_for_owner(db: AsyncSession, owner_id: int) -> list[Document]:
    stmt = (
        select(Document)
        .where(Document.user_id == owner_id)
        .order_by(Document.created_at.desc(), Document.id.desc())
    )
    return list((await db.execute(stmt)).scalars().all())


async def search_documents(
    db: AsyncSession,
    query: str | None = None,
    doc_type: str | None = None,
    doc_date: date | None = None,
    limit: int = SEARCH_LIMIT,
) -> list[tuple[Document, str | None]]:
    """Public search; rows come back with the uploader's email, or None when the owner is gone."""
    filters = []
    if query:
        pattern = f"%{query}%"
        filters.append(or_(Document.document_name.ilike(pattern), Document.original_filename.ilike(pattern)))
    if doc_type:
        filters.append(Document.document_type == doc_type)
    if doc_date:
        filters.append(Document.document_date == doc_date)

    stmt = select(Document, User.email).outerjoin(User, User.id == Document.user_id)
    if filters:
        stmt = stmt.where(and_(*filters))
    stmt = stmt.order_by(Document.created_at.desc(), Document.id.desc()).limit(min(limit, SEARCH_LIMIT))
    return [(doc, email) for doc, email in (await db.execute(stmt)).all()]


async def delete_document(db: AsyncSession, storage: BlobStorage, document_id: int, requester_id: int) -> DeleteOutcome:
    doc = await db.get(Document, document_id)
    if doc is None:
        raise NotFound()
    if doc.user_id != requester_id:
        raise Forbidden()

    blob_removed = await storage.remove(doc.file_path)
    if not blob_removed:
        logger.info("document %s deleted without removing blob %s", document_id, doc.file_path)

    await db.execute(delete(Document).where(Document.id == document_id))
    await db.commit()
    return DeleteOutcome(document_id=document_id, blob_removed=blob_removed)
