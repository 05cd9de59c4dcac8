"""
Team Pricing Package

Seat-based subscription pricing for multi-agent workspaces.
Resolves a team's seat mix into list price, volume discount and final total,
and renders the result as a plain-language explanation.
"""

__version__ = "1.0.0"
