# pathwise/models/entities.py
"""
Stored record shapes for the seven entity kinds.

Field names are snake_case in Python and camelCase on the wire
(alias generator); both spellings are accepted on input.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LearningPathStatus = Literal["not_started", "in_progress", "completed"]
ChatMode = Literal["standard", "enhanced", "magic-loops"]
RemoteType = Literal["remote", "hybrid", "on-site"]
Membership = Literal["free", "premium"]


def clamp_score(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    return max(0, min(100, value))


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Record(CamelModel):
    id: int
    created_at: datetime


class User(Record):
    username: str
    email: str
    # hashed; never serialized
    password: str = Field(exclude=True)
    full_name: Optional[str] = None
    profile_complete: bool = False
    skills: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    education_level: Optional[str] = None
    experience: Optional[str] = None
    target_career: Optional[str] = None
    resume_url: Optional[str] = None
    membership: Membership = "free"


class Career(Record):
    user_id: int
    career_title: str
    description: Optional[str] = None
    salary_range: Optional[str] = None
    growth_rate: Optional[str] = None
    fit_score: Optional[int] = None
    required_skills: List[str] = Field(default_factory=list)

    @field_validator("fit_score")
    @classmethod
    def clamp_fit_score(cls, value):
        return clamp_score(value)


class Skill(Record):
    user_id: int
    skill_name: str
    category: str
    proficiency: Optional[int] = None
    is_missing: bool = False


class Resume(Record):
    user_id: int
    original_content: Optional[str] = None
    optimized_content: Optional[str] = None
    ai_suggestions: List[str] = Field(default_factory=list)
    status: str = "pending"


class DevelopmentPlan(CamelModel):
    priority_skills: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    experience_building: List[str] = Field(default_factory=list)


class CareerProgression(CamelModel):
    next_roles: List[str] = Field(default_factory=list)
    timeline_estimate: str = ""


class Job(Record):
    user_id: int
    job_title: str
    company: Optional[str] = None
    description: Optional[str] = None
    match_percentage: Optional[int] = None
    match_tier: Optional[str] = None
    salary: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    match_reasons: List[str] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    user_skill_match: List[str] = Field(default_factory=list)
    skill_gaps: List[str] = Field(default_factory=list)
    skill_match_count: int = 0
    skill_gap_count: int = 0
    growth_potential: Optional[str] = None
    industry_trends: Optional[str] = None
    remote_type: RemoteType = "on-site"
    development_plan: DevelopmentPlan = Field(default_factory=DevelopmentPlan)
    career_progression: CareerProgression = Field(default_factory=CareerProgression)
    application_status: str = "Not Applied"
    is_saved: bool = False

    @field_validator("match_percentage")
    @classmethod
    def clamp_match_percentage(cls, value):
        return clamp_score(value)


class LearningPath(Record):
    user_id: int
    skill_id: int
    course_title: str
    platform: Optional[str] = None
    cost: Optional[str] = None
    duration: Optional[str] = None
    url: Optional[str] = None
    status: LearningPathStatus = "not_started"


class ChatMessage(CamelModel):
    role: str
    content: str
    timestamp: str
    ai_provider: Optional[str] = None


class Chat(Record):
    user_id: int
    title: str = "New Chat"
    messages: List[ChatMessage] = Field(default_factory=list)
    chat_mode: ChatMode = "standard"
