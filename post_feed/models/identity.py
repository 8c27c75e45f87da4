"""
Identity Models

The authenticated user as resolved by the identity provider.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Authenticated user. Absence is modelled as ``None``, never a blank id."""
    id: str
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")
