
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.auth.deps import get_current_user, get_db, get_storage
from regs_insight.documents.service import (
    delete_document,
    list_documents_for_owner,
    parse_date,
    search_documents,
)
from regs_insight.errors import NotFound, ValidationError
from regs_insight.schemas.auth import TokenClaims
from regs_insight.schemas.document import DocumentOut, OkOut, SearchResultOut
from regs_insight.uploads.storage import BlobStorage

router = APIRouter(prefix="/api", tags=["documents"])


@router.get("/mydocs", response_model=list[DocumentOut])
async def my_documents(user: TokenClaims = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await list_documents_for_owner(db, user.id)


@router.delete("/documents/{doc_id}", response_model=OkOut)
async def remove_document(
    doc_id: str,
    user: TokenClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: BlobStorage = Depends(get_storage),
):
    try:
        document_id = int(doc_id)
    except ValueError:
        # no row can carry a non-numeric id
        raise NotFound()
    await delete_document(db, storage, document_id, user.id)
    return OkOut()


@router.get("/search", response_model=list[SearchResultOut])
async def search(
    q: str | None = Query(None),
    type: str | None = Query(None),
    date: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    try:
        doc_date = parse_date(date, "date")
    except ValidationError:
        # an unparseable date equals no stored document_date
        return []
    rows = await search_documents(db, query=q, doc_type=type, doc_date=doc_date)
    return [
        SearchResultOut(**DocumentOut.model_validate(doc).model_dump(), uploaded_by=email)
        for doc, email in rows
    ]
