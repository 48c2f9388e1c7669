
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from regs_insight.auth.deps import get_app_settings, get_db
from regs_insight.auth.service import authenticate_user, register_user
from regs_insight.config import Settings
from regs_insight.schemas.auth import LoginIn, LoginOut, SignupIn, SignupOut

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", response_model=SignupOut)
async def signup(body: SignupIn, db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    result = await register_user(db, settings, body.name, body.email, body.password)
    return SignupOut(token=result.token, id=result.user.id, email=result.user.email)


@router.post("/login", response_model=LoginOut)
async def login(body: LoginIn, db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    result = await authenticate_user(db, settings, body.email, body.password)
    return LoginOut(token=result.token, id=result.user.id, email=result.user.email, name=result.user.name)
