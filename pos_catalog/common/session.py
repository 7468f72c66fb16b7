"""
Editing Session

The current tenant and user, built once at startup and passed explicitly to
whatever needs it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config_loader import load_settings


@dataclass(frozen=True)
class Session:
    """Who is editing, and for which tenant/industry."""
    tenant_id: str
    industry_id: str
    user_id: str = ""
    role: str = ""

    def __post_init__(self):
        if not self.tenant_id:
            raise ValueError("Session tenant_id is required")
        if not self.industry_id:
            raise ValueError("Session industry_id is required")

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]] = None) -> "Session":
        """
        Build a session from the 'session' section of the settings.

        Args:
            settings: Parsed settings (if None, loads settings.yaml)
        """
        if settings is None:
            settings = load_settings()
        section = settings.get('session') or {}
        return cls(
            tenant_id=str(section.get('tenant_id', '')),
            industry_id=str(section.get('industry_id', '')),
            user_id=str(section.get('user_id', '')),
            role=str(section.get('role', '')),
        )
