# pathwise/services/extraction.py
"""
Best-effort extraction of structured fields from free-text AI completions.

Exports:
- extract_score(text, default=65) -> int
- extract_percentage(text, label, default) -> int
- extract_section(text, heading) -> list[str]
- extract_summary(text, default) -> str
- load_json_payload(text) -> dict | list | None
- extract_business_evaluation / extract_market_analysis / extract_skill_gap /
  extract_career_recommendations / extract_job_matches / extract_resume_optimization

None of these raise on malformed input: a miss yields an empty list or the
documented default. Callers that can ask the provider for JSON get the
structured path first; the regex heuristics only run when that fails.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from pathwise.models.advice import (
    BusinessEvaluation,
    CareerRecommendation,
    CourseRecommendation,
    JobMatch,
    MarketAnalysis,
    MissingSkill,
    ResumeOptimization,
    SkillGapAnalysis,
)

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 65
DEFAULT_GROWTH_POTENTIAL = 15

# "82/100", "82%", "82 out of 100"
SCORE_RE = re.compile(r"(\d{1,3})(?:\s*/\s*100|%|\s*out of\s*100)", re.IGNORECASE)
# items are separated by bullets, numbered markers or sentence ends
ITEM_SPLIT_RE = re.compile(r"\n-|\n•|\n\*|\n\d+\.|\.\s+")
BULLET_PREFIX_RE = re.compile(r"^(?:[-•*]|\d+\.)\s*")
URL_RE = re.compile(r"https?://\S+")
FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
NAME_WITH_CATEGORY_RE = re.compile(r"^(?P<name>.+?)\s*\((?P<category>[^)]+)\)$")
FIELD_SEP_RE = re.compile(r"\s+[-–|]\s+")


def extract_score(text: Optional[str], default: int = DEFAULT_SCORE) -> int:
    if not text:
        return default
    m = SCORE_RE.search(text)
    return int(m.group(1)) if m else default


def extract_percentage(text: Optional[str], label: str, default: int) -> int:
    """Find '<label>: NN%' (label words may be separated by any whitespace)."""
    if not text:
        return default
    label_re = r"\s*".join(re.escape(w) for w in label.split())
    m = re.search(label_re + r"[:\s]+(\d+)%", text, re.IGNORECASE)
    return int(m.group(1)) if m else default


def _section_pattern(heading: str) -> "re.Pattern[str]":
    # stop at a blank line, a line starting with a capital letter (next heading) or the end
    return re.compile(
        re.escape(heading) + r"[:\s]+(.*?)(?=\n\s*\n|\n\s*(?-i:[A-Z])|\Z)",
        re.IGNORECASE | re.DOTALL,
    )


def extract_section(text: Optional[str], heading: str) -> List[str]:
    if not text:
        return []
    m = _section_pattern(heading).search(text)
    if not m:
        return []
    body = BULLET_PREFIX_RE.sub("", m.group(1).strip(), count=1)
    items = []
    for raw in ITEM_SPLIT_RE.split(body):
        item = BULLET_PREFIX_RE.sub("", raw.strip()).strip().rstrip(".").strip()
        if item:
            items.append(item)
    return items


def extract_summary(text: Optional[str], default: str) -> str:
    if not text:
        return default
    first = text.strip().split("\n\n")[0].strip()
    return first or default


def load_json_payload(text: Optional[str]) -> Optional[Union[Dict[str, Any], List[Any]]]:
    """Parse raw JSON, fenced JSON, or the outermost {...} span of text."""
    if not text:
        return None
    candidates = [text.strip()]
    fenced = FENCE_RE.search(text)
    if fenced:
        candidates.insert(0, fenced.group(1).strip())
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(data, (dict, list)):
            return data
    return None


def _items_under(payload: Any, *keys: str) -> List[Any]:
    """List found under the first matching key, or the payload itself if it is a list."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def _validate_each(model, items: Sequence[Any]) -> List[Any]:
    out = []
    for item in items:
        try:
            out.append(model.model_validate(item))
        except ValidationError as exc:
            logger.debug("Dropping unparseable %s item: %s", model.__name__, exc)
    return out


def _blocks(text: str) -> List[str]:
    return [b.strip() for b in re.split(r"\n\s*\n", text) if b.strip()]


def _clean_title(line: str) -> str:
    line = BULLET_PREFIX_RE.sub("", line.strip())
    line = line.replace("**", "").replace("#", "").strip()
    return line.rstrip(":").strip()


# -- entrepreneurship -----------------------------------------------------

def extract_business_evaluation(text: Optional[str]) -> BusinessEvaluation:
    return BusinessEvaluation(
        score=extract_score(text),
        strengths=extract_section(text, "Strengths"),
        weaknesses=extract_section(text, "Weaknesses"),
        opportunities=extract_section(text, "Opportunities"),
        threats=extract_section(text, "Threats"),
        next_steps=extract_section(text, "Next Steps"),
        summary=extract_summary(text, "Analysis complete."),
    )


def extract_market_analysis(text: Optional[str]) -> MarketAnalysis:
    return MarketAnalysis(
        growth_potential=extract_percentage(text, "Growth Potential", DEFAULT_GROWTH_POTENTIAL),
        entry_barriers=extract_section(text, "Entry Barriers"),
        market_trends=extract_section(text, "Market Trends"),
        marketing_strategies=extract_section(text, "Marketing Strategies"),
        competitor_analysis=extract_section(text, "Competitor Analysis"),
        recommendations=extract_section(text, "Recommendations"),
        summary=extract_summary(text, "Market analysis complete."),
    )


# -- skill gap ------------------------------------------------------------

def _parse_missing_skill(item: str) -> MissingSkill:
    m = NAME_WITH_CATEGORY_RE.match(item)
    if m:
        return MissingSkill(name=m.group("name").strip(), category=m.group("category").strip())
    parts = FIELD_SEP_RE.split(item, maxsplit=1)
    if len(parts) == 2:
        return MissingSkill(name=parts[0].strip(), category=parts[1].strip())
    return MissingSkill(name=item)


def _parse_course(item: str, missing: Sequence[MissingSkill]) -> CourseRecommendation:
    url_match = URL_RE.search(item)
    url = url_match.group(0).rstrip(").,") if url_match else None
    rest = URL_RE.sub("", item).strip(" -–|()")
    parts = [p.strip() for p in FIELD_SEP_RE.split(rest) if p.strip()]
    title = parts[0] if parts else rest
    lowered = title.lower()
    skill = next((s for s in missing if s.name.lower() in lowered), None)
    if skill is None and missing:
        skill = missing[0]
    return CourseRecommendation(
        title=title,
        skill_name=skill.name if skill else title,
        category=skill.category if skill else None,
        platform=parts[1] if len(parts) > 1 else None,
        cost=parts[2] if len(parts) > 2 else None,
        duration=parts[3] if len(parts) > 3 else None,
        url=url,
    )


def _normalize_course(raw: Any) -> Any:
    # providers sometimes name the skill field differently
    if isinstance(raw, dict) and "skillName" not in raw and "skill_name" not in raw:
        raw = dict(raw)
        raw["skillName"] = raw.get("skill") or raw.get("title", "")
    return raw


def extract_skill_gap(text: Optional[str], current_skills: Sequence[str], target_career: str) -> SkillGapAnalysis:
    payload = load_json_payload(text)
    if isinstance(payload, dict):
        missing_raw = [
            {"name": m} if isinstance(m, str) else m
            for m in _items_under(payload, "missingSkills", "missing_skills")
        ]
        missing = _validate_each(MissingSkill, missing_raw)
        courses = _validate_each(
            CourseRecommendation,
            [_normalize_course(c) for c in _items_under(payload, "recommendedCourses", "recommended_courses", "courses")],
        )
        summary = payload.get("summary") if isinstance(payload.get("summary"), str) else ""
    else:
        missing = [_parse_missing_skill(item) for item in extract_section(text, "Missing Skills")]
        courses = [_parse_course(item, missing) for item in extract_section(text, "Recommended Courses")]
        summary = extract_summary(text, "")
    return SkillGapAnalysis(
        target_career=target_career,
        current_skills=list(current_skills),
        missing_skills=missing,
        recommended_courses=courses,
        summary=summary,
    )


# -- careers / jobs -------------------------------------------------------

def extract_career_recommendations(text: Optional[str]) -> List[CareerRecommendation]:
    payload = load_json_payload(text)
    if payload is not None:
        return _validate_each(CareerRecommendation, _items_under(payload, "careers", "recommendations"))
    careers = []
    for block in _blocks(text or ""):
        lines = block.splitlines()
        title = _clean_title(lines[0])
        if not title:
            continue
        careers.append(CareerRecommendation(
            title=title,
            description=" ".join(l.strip() for l in lines[1:2]) or None,
            fit_score=extract_score(block, default=0),
            required_skills=extract_section(block, "Required Skills"),
        ))
    return careers


def extract_job_matches(text: Optional[str]) -> List[JobMatch]:
    payload = load_json_payload(text)
    if payload is not None:
        return _validate_each(JobMatch, _items_under(payload, "jobs", "matches"))
    jobs = []
    for block in _blocks(text or ""):
        lines = block.splitlines()
        title = _clean_title(lines[0])
        if not title:
            continue
        company = None
        if " at " in title:
            title, company = [p.strip() for p in title.split(" at ", 1)]
        jobs.append(JobMatch(
            title=title,
            company=company,
            description=" ".join(l.strip() for l in lines[1:2]) or None,
            match_percentage=extract_score(block, default=0),
            required_skills=extract_section(block, "Required Skills"),
            skill_gaps=extract_section(block, "Skill Gaps"),
        ))
    return jobs


def extract_resume_optimization(text: Optional[str], original: str) -> ResumeOptimization:
    payload = load_json_payload(text)
    if isinstance(payload, dict):
        optimized = payload.get("optimizedContent") or payload.get("optimized_content")
        improvements = payload.get("improvements") or payload.get("suggestions") or []
        if isinstance(optimized, str) and optimized.strip():
            return ResumeOptimization(
                optimized_content=optimized,
                improvements=[str(i) for i in improvements if i] if isinstance(improvements, list) else [],
            )
    improvements = extract_section(text, "Improvements")
    body = (text or "").strip()
    return ResumeOptimization(optimized_content=body or original, improvements=improvements)
