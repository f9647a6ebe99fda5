"""
Request payload schemas for the API.
Each model validates one JSON body before it reaches a service.
"""
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .models.rating import MAX_RATING, MIN_RATING


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class CourseIn(BaseModel):
    """Create/edit form of the admin panel."""
    title: str = Field(..., min_length=1)
    provider: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    course_url: str = Field(..., min_length=1)
    type: Literal['FREE', 'PAID'] = 'FREE'
    image_url: Optional[str] = None
    instructor: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    difficulty: Optional[Literal['Beginner', 'Intermediate', 'Advanced']] = None
    duration: Optional[str] = None
    category: Optional[str] = None

    @field_validator('title', 'provider', 'description', 'course_url', mode='before')
    @classmethod
    def strip_required(cls, value):
        return _strip(value)

    @field_validator('image_url', 'instructor', 'duration', 'category', mode='before')
    @classmethod
    def empty_to_none(cls, value):
        return _strip(value) or None

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_update(self) -> Dict[str, Any]:
        """Every editable column, blanks included, so an edit can clear optional fields."""
        return self.model_dump()


class AdminCredentials(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator('email', mode='before')
    @classmethod
    def strip_email(cls, value):
        return _strip(value)


class RatingIn(BaseModel):
    user_name: str = Field(..., min_length=1)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    review: Optional[str] = None

    @field_validator('user_name', mode='before')
    @classmethod
    def strip_name(cls, value):
        return _strip(value)

    @field_validator('review', mode='before')
    @classmethod
    def blank_review(cls, value):
        return _strip(value) or None


class UserScoped(BaseModel):
    """Body carrying the caller's display name."""
    user_id: str = Field(..., min_length=1)

    @field_validator('user_id', mode='before')
    @classmethod
    def strip_user(cls, value):
        return _strip(value)


class ProgressSetIn(UserScoped):
    progress_percentage: float = Field(..., allow_inf_nan=False)


class ProgressModuleIn(UserScoped):
    total_modules: Optional[int] = Field(None, ge=1)


class ProgressIncrementIn(UserScoped):
    increment: float = Field(10.0, gt=0)


class FavoriteIn(UserScoped):
    pass


class AchievementIn(BaseModel):
    badge_type: str = Field(..., min_length=1)
    badge_name: str = Field(..., min_length=1)
    description: str = ''


def first_error(exc) -> str:
    """Human readable message for the first error of a pydantic ValidationError."""
    errors = exc.errors()
    if not errors:
        return 'Invalid request body'
    error = errors[0]
    location = '.'.join(str(part) for part in error.get('loc', ()))
    if error.get('type') == 'missing':
        return f'Missing required field: {location}'
    return f'Invalid value for {location}: {error.get("msg")}' if location else error.get('msg', 'Invalid request body')
