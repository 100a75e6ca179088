from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserBase(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserCreate(UserBase):
    full_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class UserLogin(UserBase):
    password: str


class User(UserBase):
    id: int
    uuid: str
    full_name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class TokenUser(BaseModel):
    """Identity carried by a verified access token"""

    user_id: int
    uuid: str
    email: str
    role: str = "USER"


class Budget(BaseModel):
    min: float = 0
    max: float = 1000


class ProfilePreferences(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    brands: List[str] = []
    budget: Budget = Field(default_factory=Budget)
    sustainability_focus: bool = False
    minimalist_wardrobe: bool = False


class Sizes(BaseModel):
    top: str = ""
    bottom: str = ""
    shoes: str = ""
    dress: str = ""


class Location(BaseModel):
    city: str = ""
    country: str = ""
    timezone: str = ""


class ProfileSettings(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    notifications: bool = True
    public_profile: bool = False
    share_outfits: bool = True


class Profile(BaseModel):
    user_id: str
    display_name: str = ""
    bio: str = ""
    avatar: Optional[str] = None
    style_personality: List[str] = []
    favorite_colors: List[str] = []
    sizes: Dict[str, Any] = {}
    preferences: Dict[str, Any] = {}
    location: Dict[str, Any] = {}
    settings: Dict[str, Any] = {}
    quiz_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Fields a user may change; unknown keys such as user_id are ignored"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    style_personality: Optional[List[str]] = None
    favorite_colors: Optional[List[str]] = None
    sizes: Optional[Sizes] = None
    preferences: Optional[ProfilePreferences] = None
    location: Optional[Location] = None
    settings: Optional[ProfileSettings] = None


class QuizAnswers(BaseModel):
    lifestyle: Optional[str] = None
    colors: Optional[str] = None
    fit: Optional[str] = None

    @field_validator("lifestyle", "colors", "fit", mode="before")
    @classmethod
    def _normalize_answer(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip().lower()


class StyleQuizRequest(BaseModel):
    answers: QuizAnswers = Field(default_factory=QuizAnswers)
