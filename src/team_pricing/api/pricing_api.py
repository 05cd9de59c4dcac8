"""
Pricing API - FastAPI router for team pricing, plan recommendation and guardrails.
"""
import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..engine.models import BillingInterval, SeatSelection, PricingInputError
from ..engine.explainer import describe_team_pricing
from ..policy.guardrails import GuardrailContext, derive_feature_usage, run_guardrail_checks
from ..services.recommendation_service import Questionnaire, recommend_plan
from .state import engine, settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pricing", tags=["pricing"])

Volume = Literal["low", "medium", "high"]


# Pydantic models for API
class SeatInput(BaseModel):
    """One seat line as sent by a client. Tier/count are validated by the engine."""
    tier: Any = None
    count: Any = None


class ExplainRequest(BaseModel):
    """Request model for pricing a seat list."""
    seats: list[SeatInput] = Field(default_factory=list)
    billing_interval: Any = None


class RecommendRequest(BaseModel):
    """Plan advisor questionnaire."""
    team_size: int
    call_volume: Volume = "low"
    email_volume: Volume = "low"
    media_volume: Optional[Volume] = None
    analytics_volume: Optional[Volume] = None
    needs_voice: bool = False
    needs_insights: bool = False
    budget_sensitivity: Volume = "medium"
    billing_interval: Any = None


class GuardrailRequest(BaseModel):
    """Current vs proposed seat configuration."""
    current_seats: list[SeatInput] = Field(default_factory=list)
    proposed_seats: list[SeatInput] = Field(default_factory=list)
    active_member_count: Optional[int] = None
    billing_interval: Any = None


def _to_selections(seats: list[SeatInput]) -> list[SeatSelection]:
    return [SeatSelection(tier=s.tier, count=s.count) for s in seats]


def _interval(value: Any) -> BillingInterval:
    if value is None:
        value = settings.default_billing_interval
    return BillingInterval.parse(value)


# Endpoints

@router.get("/tiers")
async def list_tiers():
    """List tiers with per-seat prices for each billing interval."""
    return [
        {
            "tier": config.tier.value,
            "display_name": config.display_name,
            "monthly_price": float(config.unit_price(BillingInterval.MONTHLY)),
            "yearly_price": float(config.unit_price(BillingInterval.YEARLY)),
        }
        for config in engine.tier_table.values()
    ]


@router.post("/explain")
async def explain_pricing(req: ExplainRequest):
    """Price a seat list and explain the result."""
    try:
        breakdown = engine.calculate_team_pricing(_to_selections(req.seats), _interval(req.billing_interval))
    except PricingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error pricing seat list")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "breakdown": breakdown.to_dict(),
        "explanation": describe_team_pricing(breakdown),
    }


@router.post("/recommend")
async def recommend(req: RecommendRequest):
    """Recommend a seat mix from questionnaire answers."""
    try:
        questionnaire = Questionnaire(
            team_size=req.team_size,
            call_volume=req.call_volume,
            email_volume=req.email_volume,
            media_volume=req.media_volume,
            analytics_volume=req.analytics_volume,
            needs_voice=req.needs_voice,
            needs_insights=req.needs_insights,
            budget_sensitivity=req.budget_sensitivity,
            billing_interval=_interval(req.billing_interval),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        recommendation = recommend_plan(questionnaire, engine)
    except Exception as e:
        logger.exception("Error generating plan recommendation")
        raise HTTPException(status_code=500, detail=str(e))

    return recommendation.to_dict()


@router.post("/guardrails")
async def check_guardrails(req: GuardrailRequest):
    """Check a proposed seat change; features and usage are derived from the current seats."""
    try:
        current = _to_selections(req.current_seats)
        proposed = _to_selections(req.proposed_seats)
        usage = derive_feature_usage(current)
        context = GuardrailContext(
            current_seats=current,
            proposed_seats=proposed,
            current_features=usage,
            usage_flags=usage,
            active_member_count=req.active_member_count,
            billing_interval=_interval(req.billing_interval),
        )
        result = run_guardrail_checks(context, engine)
    except PricingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error running guardrail checks")
        raise HTTPException(status_code=500, detail=str(e))

    return result.to_dict()
