import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from studybudget.api.dependencies import get_assessment
from studybudget.api.schemas import AssessmentRequest, InsightsRequest, MotivationRequest, TextResponse
from studybudget.integration.wellness import WellnessAssessmentService
from studybudget.models import LifestyleAssessment

router = APIRouter()


@router.post("/api/assessment")
async def assess_lifestyle(
    req: AssessmentRequest,
    service: Annotated[WellnessAssessmentService, Depends(get_assessment)],
) -> LifestyleAssessment:
    result = await asyncio.to_thread(service.assess, req.responses)
    if result is None:
        raise HTTPException(status_code=502, detail="Assessment unavailable")
    return result


@router.post("/api/assessment/insights")
async def assessment_insights(
    req: InsightsRequest,
    service: Annotated[WellnessAssessmentService, Depends(get_assessment)],
) -> TextResponse:
    text = await asyncio.to_thread(service.generate_insights, req.assessment)
    if text is None:
        raise HTTPException(status_code=502, detail="Insights unavailable")
    return TextResponse(text=text)


@router.post("/api/assessment/motivation")
async def assessment_motivation(
    req: MotivationRequest,
    service: Annotated[WellnessAssessmentService, Depends(get_assessment)],
) -> TextResponse:
    text = await asyncio.to_thread(service.personalized_motivation, req.area)
    if text is None:
        raise HTTPException(status_code=502, detail="Motivation unavailable")
    return TextResponse(text=text)
