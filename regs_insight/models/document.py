
from sqlalchemy import Column, Integer, String, Date, TIMESTAMP, ForeignKey, func
from regs_insight.db.session import Base

class Document(Base):
    __tablename__ = "documents"
    id = Column(Integer, primary_key=True, autoincrement=True)
    # ownership is soft: removing the user keeps the row with a null owner
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    document_name = Column(String(500))
    document_type = Column(String(200))
    document_date = Column(Date)
    file_path = Column(String(1000))
    original_filename = Column(String(500))
    created_at = Column(TIMESTAMP, server_default=func.now())
