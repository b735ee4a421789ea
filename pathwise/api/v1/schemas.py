# pathwise/api/v1/schemas.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator

from pathwise.models.advice import BusinessEvaluation, MarketAnalysis, SkillGapAnalysis
from pathwise.models.entities import CamelModel, Chat, ChatMode, LearningPath, LearningPathStatus, Membership, Skill

# -- auth / users ---------------------------------------------------------

def _not_null(value):
    # partial updates may omit a field but never blank out a non-nullable one
    if value is None:
        raise ValueError("may not be null")
    return value


class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class LoginIn(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserSummary(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    membership: Membership = "free"


class AuthOut(UserSummary):
    access_token: str
    token_type: str = "bearer"


class UserOut(UserSummary):
    created_at: datetime
    profile_complete: bool = False
    skills: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    education_level: Optional[str] = None
    experience: Optional[str] = None
    target_career: Optional[str] = None
    resume_url: Optional[str] = None


class UserUpdate(CamelModel):
    full_name: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    education_level: Optional[str] = None
    experience: Optional[str] = None
    target_career: Optional[str] = None
    resume_url: Optional[str] = None
    profile_complete: Optional[bool] = None

    @field_validator("skills", "interests", "profile_complete", mode="before")
    @classmethod
    def _reject_null(cls, value):
        return _not_null(value)


# -- careers / skills -----------------------------------------------------

class CareerGenerateIn(CamelModel):
    skills: List[str]
    interests: List[str]
    education_level: str
    experience: str


class SkillCreate(CamelModel):
    skill_name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    proficiency: Optional[int] = Field(default=None, ge=0, le=100)
    is_missing: bool = False


class SkillUpdate(CamelModel):
    skill_name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    proficiency: Optional[int] = Field(default=None, ge=0, le=100)
    is_missing: Optional[bool] = None

    @field_validator("skill_name", "category", "is_missing", mode="before")
    @classmethod
    def _reject_null(cls, value):
        return _not_null(value)


class SkillGapIn(CamelModel):
    current_skills: List[str] = Field(default_factory=list)
    target_career: str = Field(min_length=2)


class SkillGapOut(CamelModel):
    analysis: SkillGapAnalysis
    learning_paths: List[LearningPath]
    # skill rows created by this analysis, missing skills first
    skills: List[Skill]


# -- resumes --------------------------------------------------------------

class ResumeCreate(CamelModel):
    original_content: Optional[str] = None
    optimized_content: Optional[str] = None
    ai_suggestions: List[str] = Field(default_factory=list)
    status: str = "pending"


class ResumeUpdate(CamelModel):
    original_content: Optional[str] = None
    optimized_content: Optional[str] = None
    ai_suggestions: Optional[List[str]] = None
    status: Optional[str] = None

    @field_validator("ai_suggestions", "status", mode="before")
    @classmethod
    def _reject_null(cls, value):
        return _not_null(value)


class ResumeOptimizeIn(CamelModel):
    resume_content: str = Field(min_length=1)
    target_position: Optional[str] = None


# -- jobs -----------------------------------------------------------------

class JobPreferences(CamelModel):
    location: Optional[str] = None
    remote: Optional[bool] = None
    min_salary: Optional[int] = Field(default=None, ge=0)


class JobMatchIn(CamelModel):
    user_skills: List[str]
    user_experience: Optional[str] = None
    preferences: Optional[JobPreferences] = None


class JobUpdate(CamelModel):
    is_saved: Optional[bool] = None
    application_status: Optional[str] = None

    @field_validator("is_saved", "application_status", mode="before")
    @classmethod
    def _reject_null(cls, value):
        return _not_null(value)


# -- learning paths -------------------------------------------------------

class LearningPathCreate(CamelModel):
    skill_id: int
    course_title: str = Field(min_length=1)
    platform: Optional[str] = None
    cost: Optional[str] = None
    duration: Optional[str] = None
    url: Optional[str] = None
    status: LearningPathStatus = "not_started"


class LearningPathUpdate(CamelModel):
    status: LearningPathStatus


# -- chats ----------------------------------------------------------------

class ChatMessageIn(CamelModel):
    role: Literal["user", "assistant", "system"]
    content: str = Field(min_length=1)
    timestamp: Optional[str] = None


class ChatCreate(CamelModel):
    title: str = Field(default="New Chat", min_length=1)
    messages: List[ChatMessageIn] = Field(default_factory=list)
    chat_mode: ChatMode = "standard"


class ChatMessagePost(CamelModel):
    content: str = Field(min_length=1)
    # switches the chat's mode for this and later messages
    chat_mode: Optional[ChatMode] = None


# -- entrepreneurship -----------------------------------------------------

class BusinessIdeaIn(CamelModel):
    business_idea: str = Field(min_length=10)
    target_market: Optional[str] = None
    skills_and_experience: Optional[str] = None


class BusinessEvaluationOut(CamelModel):
    evaluation: BusinessEvaluation
    chat: Chat


class MarketResearchIn(CamelModel):
    industry: str = Field(min_length=2)
    location: Optional[str] = None
    business_type: Optional[str] = None


class MarketResearchOut(CamelModel):
    analysis: MarketAnalysis
    chat: Chat


# -- content --------------------------------------------------------------

class ContentIn(CamelModel):
    prompt: str = Field(min_length=1)


class ContentOut(CamelModel):
    content: str
