import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vyom.database.models import UserProfile
from vyom.schemas.users import (
    Location,
    ProfilePreferences,
    ProfileSettings,
    ProfileUpdate,
    QuizAnswers,
    Sizes,
)

logger = logging.getLogger(__name__)

# Quiz answer -> style personality tag
LIFESTYLE_STYLES = {"active": "athletic", "professional": "business-casual", "creative": "artistic"}
COLOR_STYLES = {"bold": "bold", "neutral": "minimalist", "pastels": "feminine"}
FIT_STYLES = {"loose": "comfortable", "fitted": "tailored", "oversized": "trendy"}

RECOMMENDED_CATEGORIES = ["top", "bottom", "outerwear"]
STYLE_TIPS = {
    "minimalist": "Focus on versatile, neutral pieces that mix and match easily",
    "bold": "Don't be afraid to add statement pieces and vibrant colors",
    "business-casual": "Invest in quality blazers and tailored pieces for work",
}


def _default_fields(display_name: str = "") -> dict:
    return {
        "display_name": display_name,
        "bio": "",
        "avatar": None,
        "style_personality": [],
        "favorite_colors": [],
        "sizes": Sizes().model_dump(),
        "preferences": ProfilePreferences().model_dump(),
        "location": Location().model_dump(),
        "settings": ProfileSettings().model_dump(),
        "quiz_completed": False,
    }


async def get_profile(db: AsyncSession, user_id: str) -> Optional[UserProfile]:
    stmt = select(UserProfile).where(UserProfile.user_id == user_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_or_create_profile(db: AsyncSession, user_id: str, email: str) -> UserProfile:
    """Return the user's profile, creating the default one on first access"""
    profile = await get_profile(db, user_id)
    if profile:
        return profile

    profile = UserProfile(user_id=user_id, **_default_fields(email.split("@")[0]))
    db.add(profile)
    try:
        await db.commit()
    except IntegrityError:
        # Another request created it first
        await db.rollback()
        logger.info("Profile for user=%s created concurrently; re-reading", user_id)
        existing = await get_profile(db, user_id)
        if existing is None:
            raise
        return existing
    await db.refresh(profile)
    return profile


async def update_profile(db: AsyncSession, user_id: str, email: str, updates: ProfileUpdate) -> UserProfile:
    profile = await get_or_create_profile(db, user_id, email)
    for field, value in updates.model_dump(exclude_unset=True).items():
        if value is None and field != "avatar":
            continue
        setattr(profile, field, value)
    await db.commit()
    await db.refresh(profile)
    return profile


def analyze_style(answers: QuizAnswers) -> List[str]:
    """Derive style personality tags from quiz answers"""
    personality = []
    for table, answer in (
        (LIFESTYLE_STYLES, answers.lifestyle),
        (COLOR_STYLES, answers.colors),
        (FIT_STYLES, answers.fit),
    ):
        style = table.get(answer or "")
        if style:
            personality.append(style)
    return personality


def quiz_recommendations(answers: QuizAnswers, personality: List[str]) -> dict:
    return {
        "categories": list(RECOMMENDED_CATEGORIES),
        "colors": ["red", "blue", "green"] if answers.colors == "bold" else ["black", "white", "gray"],
        "brands": (
            ["Hugo Boss", "Calvin Klein"] if "business-casual" in personality else ["Zara", "H&M"]
        ),
    }


async def complete_style_quiz(db: AsyncSession, user_id: str, email: str, answers: QuizAnswers) -> List[str]:
    personality = analyze_style(answers)
    profile = await get_or_create_profile(db, user_id, email)
    profile.style_personality = personality
    profile.quiz_completed = True
    await db.commit()
    return personality


def personal_recommendations(profile: Optional[UserProfile]) -> dict:
    if profile is None:
        return {
            "message": "Complete your profile to get personalized recommendations!",
            "suggestions": ["Take the style quiz", "Add your favorite colors", "Set your size preferences"],
        }

    styles = list(profile.style_personality or [])
    return {
        "colors": list(profile.favorite_colors or []) or ["navy", "white", "black"],
        "styles": styles or ["casual"],
        "categories": list(RECOMMENDED_CATEGORIES),
        "tips": [tip for style, tip in STYLE_TIPS.items() if style in styles],
    }
