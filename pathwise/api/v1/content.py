# pathwise/api/v1/content.py
from fastapi import APIRouter

from pathwise.api.v1.schemas import ContentIn, ContentOut
from pathwise.services import advisor

router = APIRouter(tags=["content"])


@router.post("/generate-content", response_model=ContentOut)
async def generate_content(payload: ContentIn):
    """Free resume-writing helper; no session needed."""
    return ContentOut(content=await advisor.generate_content(payload.prompt))
