"""Account Routes — signup, login, account listing under /api."""

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.api.dependencies import get_password_hasher
from records_api.config import Settings, get_settings
from records_api.infrastructure.database import get_db
from records_api.infrastructure.password_hasher import PasswordHasher
from records_api.schemas.accounts import AccountSummary, LoginResponse, MessageResponse
from records_api.services import handle_accounts

router = APIRouter(prefix="/api", tags=["accounts"])


@router.post(
    "/signup", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    payload: dict = Body(default_factory=dict),
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    return await handle_accounts.signup(payload, db, hasher)


@router.post(
    "/login", response_model=LoginResponse, response_model_exclude_none=True,
)
async def login(
    payload: dict = Body(default_factory=dict),
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings),
):
    return await handle_accounts.login(payload, db, hasher, settings)


@router.get("/users", response_model=list[AccountSummary])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await handle_accounts.list_accounts(db)
