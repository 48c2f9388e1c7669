
from sqlalchemy import Column, Integer, String, TIMESTAMP, func
from regs_insight.db.session import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=True)
    email = Column(String(255), unique=True)
    password_hash = Column(String(255))
    created_at = Column(TIMESTAMP, server_default=func.now())
