"""
Centralized settings and path configuration for team pricing.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass(frozen=True)
class Settings:
    """Application settings with sensible defaults."""

    project_root: Path

    # Optional tier price override; built-in prices are used when unset
    tiers_csv: Optional[Path] = None

    # "monthly" or "yearly"
    default_billing_interval: str = "monthly"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def load(cls, project_root: Optional[Path] = None, env: Optional[dict] = None) -> 'Settings':
        """Load settings from the environment and project structure."""
        env = os.environ if env is None else env
        root = project_root or get_project_root()

        tiers_csv = None
        if env.get('TEAM_PRICING_TIERS_CSV'):
            tiers_csv = Path(env['TEAM_PRICING_TIERS_CSV'])
            if not tiers_csv.is_absolute():
                tiers_csv = root / tiers_csv

        interval = env.get('TEAM_PRICING_BILLING_INTERVAL', 'monthly').strip().lower()
        if interval not in ('monthly', 'yearly'):
            raise ValueError(
                f"TEAM_PRICING_BILLING_INTERVAL must be 'monthly' or 'yearly', got '{interval}'"
            )

        try:
            api_port = int(env.get('TEAM_PRICING_API_PORT', '8000'))
        except ValueError:
            raise ValueError("TEAM_PRICING_API_PORT must be an integer") from None

        return cls(
            project_root=root,
            tiers_csv=tiers_csv,
            default_billing_interval=interval,
            api_host=env.get('TEAM_PRICING_API_HOST', '0.0.0.0'),
            api_port=api_port,
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
