
from datetime import date, datetime
from pydantic import BaseModel

class DocumentOut(BaseModel):
    id: int
    user_id: int | None
    document_name: str | None
    document_type: str | None
    document_date: date | None
    file_path: str | None
    original_filename: str | None
    created_at: datetime | None

    class Config:
        from_attributes = True

class SearchResultOut(DocumentOut):
    uploaded_by: str | None = None

class OkOut(BaseModel):
    ok: bool = True

class HealthOut(BaseModel):
    ok: bool
    db_connected: bool
    error: str | None = None
