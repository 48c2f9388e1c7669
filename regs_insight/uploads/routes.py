
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.auth.deps import get_current_user, get_db, get_storage
from regs_insight.documents.service import insert_document, parse_date
from regs_insight.schemas.auth import TokenClaims
from regs_insight.schemas.document import OkOut
from regs_insight.uploads.storage import BlobStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=OkOut)
async def upload_document(
    file: UploadFile | None = File(None),
    document_name: str | None = Form(None),
    document_type: str | None = Form(None),
    document_date: str | None = Form(None),
    user: TokenClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: BlobStorage = Depends(get_storage),
):
    doc_date = parse_date(document_date, "document_date")
    # the blob is written first; a failed insert leaves it orphaned on disk
    blob = await storage.save(file) if file is not None and file.filename else None
    try:
        await insert_document(db, user.id, blob, document_name, document_type, doc_date)
    except Exception:
        if blob is not None:
            logger.error("upload failed, blob %s left orphaned", blob.file_path)
        raise
    return OkOut()
