# pathwise/services/llm_adapters/mock_adapter.py
"""
Deterministic mock adapter to mimic the AI provider for development, tests and CI.
Output varies only with task + input, so repeated calls return identical text.
"""

import asyncio
import hashlib
import json
from typing import Any, Dict, List

# skills a target career usually needs, keyed by a keyword in the career title
CAREER_SKILLS = {
    "data": [("Python", "Programming"), ("SQL", "Data"), ("Statistics", "Mathematics"),
             ("Machine Learning", "Technical"), ("Data Visualization", "Data")],
    "software": [("Python", "Programming"), ("Git", "Tools"), ("System Design", "Technical"),
                 ("Testing", "Technical"), ("Cloud Computing", "Technical")],
    "design": [("Figma", "Tools"), ("User Research", "Research"), ("Prototyping", "Technical"),
               ("Visual Design", "Creative")],
    "product": [("Roadmapping", "Management"), ("User Research", "Research"), ("SQL", "Data"),
                ("Stakeholder Management", "Soft Skills")],
}
GENERIC_SKILLS = [("Communication", "Soft Skills"), ("Project Management", "Management"),
                  ("Data Analysis", "Data")]

PLATFORMS = [("Coursera", "Free to audit", "4 weeks"), ("Udemy", "$19.99", "12 hours"),
             ("edX", "Free", "6 weeks")]


def _digest(task: str, data: Any) -> int:
    s = json.dumps({"task": task, "input": data}, sort_keys=True, default=str)
    return int(hashlib.sha256(s.encode("utf-8")).hexdigest()[:8], 16)


def _skills_for(career: str) -> List[tuple]:
    lowered = (career or "").lower()
    for keyword, skills in CAREER_SKILLS.items():
        if keyword in lowered:
            return skills
    return GENERIC_SKILLS


def _career_recommendations(data: Dict[str, Any], h: int) -> str:
    skills = data.get("skills") or []
    interests = data.get("interests") or ["Technology"]
    careers = []
    for idx, interest in enumerate((interests * 3)[:3]):
        title = ["Data Scientist", "Software Engineer", "Product Manager"][(h + idx) % 3]
        careers.append({
            "title": title if idx else f"{interest} {title}".strip(),
            "description": f"Applies {', '.join(skills[:2]) or 'core skills'} to {interest.lower()} problems.",
            "salaryRange": f"${70 + 10 * idx},000 - ${110 + 15 * idx},000",
            "growthRate": f"{8 + (h + idx) % 10}% annually",
            "fitScore": 90 - 8 * idx - (h % 5),
            "requiredSkills": [s for s, _ in _skills_for(title)][:4],
        })
    return json.dumps({"careers": careers})


def _skill_gap(data: Dict[str, Any], h: int) -> str:
    current = {s.lower() for s in data.get("currentSkills") or []}
    career = data.get("targetCareer", "")
    missing = [(name, cat) for name, cat in _skills_for(career) if name.lower() not in current]
    courses = []
    for idx, (name, cat) in enumerate(missing[:3]):
        platform, cost, duration = PLATFORMS[(h + idx) % len(PLATFORMS)]
        slug = name.lower().replace(" ", "-")
        courses.append({
            "title": f"{name} Fundamentals",
            "skillName": name,
            "category": cat,
            "platform": platform,
            "cost": cost,
            "duration": duration,
            "url": f"https://www.{platform.lower()}.org/learn/{slug}",
        })
    return json.dumps({
        "missingSkills": [{"name": n, "category": c} for n, c in missing],
        "recommendedCourses": courses,
        "summary": f"You need {len(missing)} more skills to become a {career}.",
    })


def _job_match(data: Dict[str, Any], h: int) -> str:
    user_skills = data.get("userSkills") or []
    prefs = data.get("preferences") or {}
    jobs = []
    for idx, (title, company) in enumerate([("Data Analyst", "Acme Analytics"), ("Backend Developer", "Globex"),
                                            ("Business Intelligence Engineer", "Initech")]):
        required = [s for s, _ in _skills_for(title)][:4]
        matched = [s for s in required if s.lower() in {u.lower() for u in user_skills}]
        gaps = [s for s in required if s not in matched]
        jobs.append({
            "title": title,
            "company": company,
            "description": f"{title} role at {company}.",
            "matchPercentage": 88 - 12 * idx - (h % 4),
            "salary": f"${80 + 10 * idx}k - ${100 + 10 * idx}k",
            "location": prefs.get("location") or "Remote",
            "remoteType": "remote" if prefs.get("remote") else ["hybrid", "on-site", "remote"][idx],
            "matchReasons": [f"Uses {s}" for s in matched] or ["Transferable experience"],
            "requiredSkills": required,
            "userSkillMatch": matched,
            "skillGaps": gaps,
            "skillMatchCount": len(matched),
            "skillGapCount": len(gaps),
            "developmentPlan": {"prioritySkills": gaps[:2], "certifications": [], "experienceBuilding": ["Ship a portfolio project"]},
            "careerProgression": {"nextRoles": [f"Senior {title}"], "timelineEstimate": "2-3 years"},
        })
    return json.dumps({"jobs": jobs})


def _resume_optimize(data: Dict[str, Any], h: int) -> str:
    content = data.get("resumeContent", "")
    target = data.get("targetPosition") or "your target role"
    return json.dumps({
        "optimizedContent": content.strip() + f"\n\nSummary: Results-driven candidate targeting {target}.",
        "improvements": ["Quantify achievements", f"Tailor keywords to {target}", "Lead bullets with action verbs"],
    })


def _business_evaluation(data: Dict[str, Any], h: int) -> str:
    idea = data.get("businessIdea", "your idea")
    score = 60 + h % 30
    return (
        f"Your concept ({idea}) shows promise. Feasibility score: {score}/100\n\n"
        "Strengths:\n- Clear target market\n- Relevant founder experience\n\n"
        "Weaknesses:\n- Limited initial capital\n- Unproven demand\n\n"
        "Opportunities: Growing online adoption. Underserved niche.\n\n"
        "Threats: Established competitors. Regulatory changes.\n\n"
        "Next Steps:\n1. Interview ten potential customers\n2. Build a landing page\n3. Run a small paid pilot"
    )


def _market_research(data: Dict[str, Any], h: int) -> str:
    industry = data.get("industry", "the")
    return (
        f"The {industry} market is expanding steadily.\n\n"
        f"Growth Potential: {10 + h % 20}%\n\n"
        "Entry Barriers:\n- Brand recognition\n- Upfront compliance costs\n\n"
        "Market Trends:\n- Subscription pricing\n- Mobile-first buyers\n\n"
        "Marketing Strategies:\n- Content marketing\n- Referral programs\n\n"
        "Competitor Analysis:\n- Incumbents compete on price\n\n"
        "Recommendations:\n- Start with a focused niche\n- Partner with local suppliers"
    )


def _chat(data: Dict[str, Any], h: int, enhanced: bool) -> str:
    messages = data.get("messages") or []
    last = next((m.get("content", "") for m in reversed(messages) if m.get("role") == "user"), "")
    prefix = "In depth: " if enhanced else ""
    return f"{prefix}Here is some career guidance about \"{last[:80]}\". Focus on one skill at a time and build projects."


async def complete(task: str, payload: Dict[str, Any]) -> str:
    await asyncio.sleep(0)  # keep async signature
    data = payload.get("input") or {}
    h = _digest(task, data)
    if task == "career_recommendations":
        return _career_recommendations(data, h)
    if task == "skill_gap":
        return _skill_gap(data, h)
    if task == "job_match":
        return _job_match(data, h)
    if task == "resume_optimize":
        return _resume_optimize(data, h)
    if task == "business_evaluation":
        return _business_evaluation(data, h)
    if task == "market_research":
        return _market_research(data, h)
    if task in ("chat", "chat_enhanced"):
        return _chat(data, h, enhanced=task == "chat_enhanced")
    if task == "generate_content":
        return f"Generated content: {data.get('prompt', '')[:200]}"
    # default fallback
    return f"[mock:{task}:{h:08x}]"
