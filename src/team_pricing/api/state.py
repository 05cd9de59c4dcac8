"""Shared engine instance for API routes."""
from ..config.settings import get_settings
from ..engine.pricing_engine import PricingEngine

settings = get_settings()
engine = PricingEngine.from_settings(settings)
