"""Profile service: user profiles, the style quiz and personal recommendations."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.crud.profiles import (
    complete_style_quiz,
    get_or_create_profile,
    get_profile,
    personal_recommendations,
    quiz_recommendations,
    update_profile,
)
from vyom.database.connection import get_db
from vyom.schemas.users import Profile, ProfileUpdate, StyleQuizRequest, TokenUser
from vyom.security import get_current_user
from vyom.services.common import create_service_app, health_payload

SERVICE_NAME = "user-profile-service"

app = create_service_app(SERVICE_NAME, "User Profile Service")


@app.get("/profile")
async def read_profile(
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    profile = await get_or_create_profile(db, current_user.uuid, current_user.email)
    return {"success": True, "profile": Profile.model_validate(profile).model_dump(mode="json")}


@app.put("/profile")
async def write_profile(
        updates: ProfileUpdate,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    profile = await update_profile(db, current_user.uuid, current_user.email, updates)
    return {"success": True, "profile": Profile.model_validate(profile).model_dump(mode="json")}


@app.post("/style-quiz")
async def style_quiz(
        quiz: StyleQuizRequest,
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    personality = await complete_style_quiz(db, current_user.uuid, current_user.email, quiz.answers)
    return {
        "success": True,
        "style_personality": personality,
        "recommendations": quiz_recommendations(quiz.answers, personality),
    }


@app.get("/recommendations/personal")
async def recommendations(
        db: AsyncSession = Depends(get_db),
        current_user: TokenUser = Depends(get_current_user)
):
    profile = await get_profile(db, current_user.uuid)
    return {"success": True, "recommendations": personal_recommendations(profile)}


@app.get("/health")
async def health():
    return health_payload(SERVICE_NAME)
