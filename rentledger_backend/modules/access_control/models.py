"""Access scope models.

A scope is either unrestricted or a union of four allow-lists.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class GlobalScope(BaseModel):
    """Unrestricted visibility."""

    type: Literal["GLOBAL"] = "GLOBAL"


class RestrictedScope(BaseModel):
    """Visibility limited to the union of the allow-lists."""

    type: Literal["RESTRICTED"] = "RESTRICTED"
    allowed_estates: list[str] = Field(default_factory=list)
    allowed_landlords: list[str] = Field(default_factory=list)
    # "{estate_id}:{phase}"
    allowed_phases: list[str] = Field(default_factory=list)
    # "{landlord}|{estate_id}"
    allowed_landlord_estates: list[str] = Field(default_factory=list)


AccessScope = Annotated[GlobalScope | RestrictedScope, Field(discriminator="type")]


def phase_key(estate_id: str, phase: str) -> str:
    return f"{estate_id}:{phase}"


def landlord_estate_key(landlord: str, estate_id: str) -> str:
    return f"{landlord}|{estate_id}"
