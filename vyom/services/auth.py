"""Auth service: registration, login and token introspection."""

import logging

import jwt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.crud.users import authenticate_user, create_user, get_user_by_id
from vyom.database.connection import get_db
from vyom.schemas.users import User, UserCreate, UserLogin
from vyom.security import bearer_token, decode_access_token, token_for_user
from vyom.services.common import create_service_app, health_payload

logger = logging.getLogger(__name__)

SERVICE_NAME = "auth-service"

app = create_service_app(SERVICE_NAME, "Auth Service")


@app.post("/register")
async def register(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        user = await create_user(db, user_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Registered user uuid=%s", user.uuid)
    return {
        "success": True,
        "token": token_for_user(user),
        "user": User.model_validate(user).model_dump(),
    }


@app.post("/login")
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return {
        "success": True,
        "token": token_for_user(user),
        "user": User.model_validate(user).model_dump(),
    }


@app.get("/me")
async def me(request: Request, db: AsyncSession = Depends(get_db)):
    token = bearer_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    try:
        identity = decode_access_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = await get_user_by_id(db, identity.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return {"success": True, "user": User.model_validate(user).model_dump()}


@app.get("/health")
async def health():
    return health_payload(SERVICE_NAME)
