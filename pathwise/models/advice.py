# pathwise/models/advice.py
"""
Structured results assembled from AI completions.

These are lenient on input: numbers may arrive as "85%" or 85.4 and
enum-ish strings in any case. Anything unusable falls back to a default
rather than failing the whole result.
"""
import re
from typing import Any, List, Optional

from pydantic import Field, field_validator

from pathwise.models.entities import CamelModel, CareerProgression, DevelopmentPlan, clamp_score

_INT_RE = re.compile(r"-?\d+(?:\.\d+)?")


def coerce_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(round(value))
    if isinstance(value, str):
        m = _INT_RE.search(value)
        if m:
            return int(round(float(m.group(0))))
    return None


def coerce_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return []


class BusinessEvaluation(CamelModel):
    score: int
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    threats: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    summary: str = ""

    @field_validator("score")
    @classmethod
    def clamp(cls, value):
        return clamp_score(value)


class MarketAnalysis(CamelModel):
    growth_potential: int
    entry_barriers: List[str] = Field(default_factory=list)
    market_trends: List[str] = Field(default_factory=list)
    marketing_strategies: List[str] = Field(default_factory=list)
    competitor_analysis: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    summary: str = ""


class MissingSkill(CamelModel):
    name: str
    category: str = "Technical"


class CourseRecommendation(CamelModel):
    title: str
    skill_name: str
    category: Optional[str] = None
    platform: Optional[str] = None
    cost: Optional[str] = None
    duration: Optional[str] = None
    url: Optional[str] = None


class SkillGapAnalysis(CamelModel):
    target_career: str
    current_skills: List[str] = Field(default_factory=list)
    missing_skills: List[MissingSkill] = Field(default_factory=list)
    recommended_courses: List[CourseRecommendation] = Field(default_factory=list)
    summary: str = ""


class CareerRecommendation(CamelModel):
    title: str
    description: Optional[str] = None
    salary_range: Optional[str] = None
    growth_rate: Optional[str] = None
    fit_score: Optional[int] = None
    required_skills: List[str] = Field(default_factory=list)

    @field_validator("fit_score", mode="before")
    @classmethod
    def parse_score(cls, value):
        return coerce_int(value)

    @field_validator("required_skills", mode="before")
    @classmethod
    def parse_skills(cls, value):
        return coerce_str_list(value)


class JobMatch(CamelModel):
    title: str
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
    skill_match_count: Optional[int] = None
    skill_gap_count: Optional[int] = None
    growth_potential: Optional[str] = None
    industry_trends: Optional[str] = None
    remote_type: str = "on-site"
    application_status: Optional[str] = None
    development_plan: DevelopmentPlan = Field(default_factory=DevelopmentPlan)
    career_progression: CareerProgression = Field(default_factory=CareerProgression)

    @field_validator("match_percentage", "skill_match_count", "skill_gap_count", mode="before")
    @classmethod
    def parse_ints(cls, value):
        return coerce_int(value)

    @field_validator("match_reasons", "required_skills", "user_skill_match", "skill_gaps", mode="before")
    @classmethod
    def parse_lists(cls, value):
        return coerce_str_list(value)

    @field_validator("remote_type", mode="before")
    @classmethod
    def parse_remote_type(cls, value):
        v = str(value or "").strip().lower().replace("onsite", "on-site").replace("on site", "on-site")
        return v if v in ("remote", "hybrid", "on-site") else "on-site"


class ResumeOptimization(CamelModel):
    optimized_content: str
    improvements: List[str] = Field(default_factory=list)
