# pathwise/services/advisor.py
"""
Career-advice operations built on the LLM facade.

Each function composes a prompt, calls llm_adapter.complete and hands the
completion to the extraction adapter. Provider failures propagate as
UpstreamServiceError; nothing is persisted here.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pathwise.models.advice import (
    BusinessEvaluation,
    CareerRecommendation,
    JobMatch,
    MarketAnalysis,
    ResumeOptimization,
    SkillGapAnalysis,
)
from pathwise.models.entities import User
from pathwise.services import extraction, llm_adapter, magic_loops

logger = logging.getLogger(__name__)

CAREER_COACH_SYSTEM = (
    "You are PathWise, an expert career coach. Give specific, practical and encouraging "
    "guidance about careers, skills, job searching and professional growth."
)
ENHANCED_SYSTEM = CAREER_COACH_SYSTEM + (
    " The user is a premium member: give in-depth answers with concrete next steps, "
    "resources and realistic timelines."
)
RESUME_WRITER_SYSTEM = (
    "You are a professional resume writer and career coach. Help users create professional, "
    "concise and impactful resume content focused on achievements and skills employers value."
)
BUSINESS_ADVISOR_SYSTEM = (
    "You are an entrepreneurship advisor. Use the headings requested in the prompt, "
    "each followed by a colon and a bulleted list."
)


def match_tier(percentage: Optional[int]) -> str:
    p = percentage or 0
    if p >= 85:
        return "Excellent Match"
    if p >= 70:
        return "Strong Match"
    if p >= 50:
        return "Good Match"
    return "Potential Match"


async def _ask(task: str, prompt: str, inputs: Dict[str, Any], system: str = CAREER_COACH_SYSTEM, want_json: bool = False) -> str:
    payload = {
        "system": system,
        "messages": [{"role": "user", "content": prompt}],
        "json": want_json,
        "input": inputs,
    }
    text = await llm_adapter.complete(task, payload)
    logger.debug("Task %s returned %d chars", task, len(text or ""))
    return text


async def generate_career_recommendations(
    skills: Sequence[str], interests: Sequence[str], education_level: str, experience: str
) -> List[CareerRecommendation]:
    inputs = {
        "skills": list(skills),
        "interests": list(interests),
        "educationLevel": education_level,
        "experience": experience,
    }
    prompt = (
        "Recommend 3 careers for this person. Respond with JSON "
        '{"careers": [{"title", "description", "salaryRange", "growthRate", "fitScore" (0-100), "requiredSkills"}]}.\n'
        f"Profile: {json.dumps(inputs)}"
    )
    text = await _ask("career_recommendations", prompt, inputs, want_json=True)
    return extraction.extract_career_recommendations(text)


async def analyze_skill_gap(current_skills: Sequence[str], target_career: str) -> SkillGapAnalysis:
    inputs = {"currentSkills": list(current_skills), "targetCareer": target_career}
    prompt = (
        f"I want to become a {target_career}. My current skills: {', '.join(current_skills) or 'none'}.\n"
        'Respond with JSON {"missingSkills": [{"name", "category"}], '
        '"recommendedCourses": [{"title", "skillName", "category", "platform", "cost", "duration", "url"}], '
        '"summary"}.'
    )
    text = await _ask("skill_gap", prompt, inputs, want_json=True)
    return extraction.extract_skill_gap(text, current_skills, target_career)


def _complete_match(job: JobMatch, user_skills: Sequence[str]) -> JobMatch:
    """Fill derived fields the provider left out."""
    updates: Dict[str, Any] = {}
    if not job.match_tier:
        updates["match_tier"] = match_tier(job.match_percentage)
    if not job.user_skill_match and job.required_skills:
        owned = {s.lower() for s in user_skills}
        updates["user_skill_match"] = [s for s in job.required_skills if s.lower() in owned]
        if not job.skill_gaps:
            updates["skill_gaps"] = [s for s in job.required_skills if s.lower() not in owned]
    matched = updates.get("user_skill_match", job.user_skill_match)
    gaps = updates.get("skill_gaps", job.skill_gaps)
    if job.skill_match_count is None:
        updates["skill_match_count"] = len(matched)
    if job.skill_gap_count is None:
        updates["skill_gap_count"] = len(gaps)
    return job.model_copy(update=updates) if updates else job


async def match_jobs(
    user_skills: Sequence[str], user_experience: Optional[str] = None, preferences: Optional[Dict[str, Any]] = None
) -> List[JobMatch]:
    inputs = {
        "userSkills": list(user_skills),
        "userExperience": user_experience or "",
        "preferences": preferences or {},
    }
    prompt = (
        "Suggest job openings that fit this candidate. Respond with JSON "
        '{"jobs": [{"title", "company", "description", "matchPercentage", "salary", "location", "remoteType", '
        '"matchReasons", "requiredSkills", "userSkillMatch", "skillGaps", "developmentPlan", "careerProgression"}]}.\n'
        f"Candidate: {json.dumps(inputs)}"
    )
    text = await _ask("job_match", prompt, inputs, want_json=True)
    return [_complete_match(j, user_skills) for j in extraction.extract_job_matches(text)]


async def optimize_resume(resume_content: str, target_position: Optional[str] = None) -> ResumeOptimization:
    inputs = {"resumeContent": resume_content, "targetPosition": target_position or ""}
    target = f" for a {target_position} position" if target_position else ""
    prompt = (
        f"Optimize this resume{target}. Respond with JSON "
        '{"optimizedContent": string, "improvements": [string]}.\n\n'
        f"{resume_content}"
    )
    text = await _ask("resume_optimize", prompt, inputs, system=RESUME_WRITER_SYSTEM, want_json=True)
    return extraction.extract_resume_optimization(text, resume_content)


async def generate_content(prompt: str) -> str:
    return await _ask("generate_content", prompt, {"prompt": prompt}, system=RESUME_WRITER_SYSTEM)


async def generate_chat_response(
    messages: Sequence[Dict[str, str]], mode: str = "standard", profile: Optional[User] = None
) -> Tuple[str, str]:
    """
    Reply to a conversation. Returns (content, provider).

    messages are {"role", "content"} dicts, oldest first.
    """
    if mode == "magic-loops":
        last_user = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
        reply = await magic_loops.get_response(
            last_user,
            career_interest=profile.target_career if profile else None,
            education_level=profile.education_level if profile else None,
        )
        return reply, "magic-loops"

    task = "chat_enhanced" if mode == "enhanced" else "chat"
    system = ENHANCED_SYSTEM if mode == "enhanced" else CAREER_COACH_SYSTEM
    convo = [{"role": m["role"], "content": m["content"]} for m in messages]
    payload = {"system": system, "messages": convo, "input": {"messages": convo}}
    reply = await llm_adapter.complete(task, payload)
    return reply, llm_adapter.adapter_name()


def business_evaluation_prompt(business_idea: str, target_market: Optional[str], skills_and_experience: Optional[str]) -> str:
    return (
        f"Evaluate this business idea: {business_idea}\n"
        f"Target market: {target_market or 'not specified'}\n"
        f"Founder skills and experience: {skills_and_experience or 'not specified'}\n\n"
        "Give a feasibility score out of 100 (as NN/100), then sections titled "
        "Strengths, Weaknesses, Opportunities, Threats and Next Steps."
    )


async def evaluate_business_idea(
    business_idea: str, target_market: Optional[str] = None, skills_and_experience: Optional[str] = None
) -> Tuple[BusinessEvaluation, str]:
    """Returns the structured evaluation and the raw completion it came from."""
    inputs = {
        "businessIdea": business_idea,
        "targetMarket": target_market or "",
        "skillsAndExperience": skills_and_experience or "",
    }
    prompt = business_evaluation_prompt(business_idea, target_market, skills_and_experience)
    text = await _ask("business_evaluation", prompt, inputs, system=BUSINESS_ADVISOR_SYSTEM)
    return extraction.extract_business_evaluation(text), text


def market_research_prompt(industry: str, location: Optional[str], business_type: Optional[str]) -> str:
    return (
        f"Research the {industry} market"
        + (f" in {location}" if location else "")
        + (f" for a {business_type} business" if business_type else "")
        + ".\nState Growth Potential as a percentage, then sections titled Entry Barriers, "
        "Market Trends, Marketing Strategies, Competitor Analysis and Recommendations."
    )


async def analyze_market(
    industry: str, location: Optional[str] = None, business_type: Optional[str] = None
) -> Tuple[MarketAnalysis, str]:
    inputs = {"industry": industry, "location": location or "", "businessType": business_type or ""}
    prompt = market_research_prompt(industry, location, business_type)
    text = await _ask("market_research", prompt, inputs, system=BUSINESS_ADVISOR_SYSTEM)
    return extraction.extract_market_analysis(text), text
