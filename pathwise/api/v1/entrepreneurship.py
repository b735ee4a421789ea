# pathwise/api/v1/entrepreneurship.py
from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store
from pathwise.api.v1.chats import record_advisor_chat
from pathwise.api.v1.schemas import BusinessEvaluationOut, BusinessIdeaIn, MarketResearchIn, MarketResearchOut
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor, llm_adapter

router = APIRouter(prefix="/entrepreneurship", tags=["entrepreneurship"])


@router.post("/evaluate", response_model=BusinessEvaluationOut)
async def evaluate_idea(payload: BusinessIdeaIn, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    evaluation, raw = await advisor.evaluate_business_idea(
        payload.business_idea, payload.target_market, payload.skills_and_experience
    )
    prompt = advisor.business_evaluation_prompt(payload.business_idea, payload.target_market, payload.skills_and_experience)
    chat = record_advisor_chat(store, user.id, "Business Idea Evaluation", prompt, raw, llm_adapter.adapter_name())
    return BusinessEvaluationOut(evaluation=evaluation, chat=chat)


@router.post("/market-research", response_model=MarketResearchOut)
async def market_research(payload: MarketResearchIn, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    analysis, raw = await advisor.analyze_market(payload.industry, payload.location, payload.business_type)
    prompt = advisor.market_research_prompt(payload.industry, payload.location, payload.business_type)
    chat = record_advisor_chat(store, user.id, f"Market Research: {payload.industry}", prompt, raw, llm_adapter.adapter_name())
    return MarketResearchOut(analysis=analysis, chat=chat)
