from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from team_pricing import __version__
from team_pricing.api.pricing_api import router as pricing_router
from team_pricing.api.state import engine, settings

app = FastAPI(
    title="Team Pricing API",
    description="Seat pricing, discount explanation and plan recommendation",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Team Pricing API Active"}


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "tier_source": str(settings.tiers_csv) if settings.tiers_csv else "built-in",
        "tiers": [t.value for t in engine.tier_table],
        "currency": engine.tier_table.currency,
        "default_billing_interval": settings.default_billing_interval,
    }
