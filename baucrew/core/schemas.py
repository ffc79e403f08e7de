"""
baucrew/core/schemas.py

Core Schemas

Defines core Pydantic models used across the application, including:
- Generic action result returned by state-changing operations.
"""

from pydantic import BaseModel, Field


class ActionResult(BaseModel):
    """
    Base response for state-changing operations. Subclasses add the id of
    the record the action created or touched.
    """

    ok: bool = Field(True, description="Whether the action succeeded")
