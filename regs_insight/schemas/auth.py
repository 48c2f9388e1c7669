
from pydantic import BaseModel, Field

class SignupIn(BaseModel):
    name: str | None = Field(default=None, max_length=150)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=256)

class LoginIn(BaseModel):
    email: str
    password: str

class SignupOut(BaseModel):
    token: str
    id: int
    email: str

class LoginOut(SignupOut):
    name: str | None = None

class TokenClaims(BaseModel):
    id: int
    email: str
