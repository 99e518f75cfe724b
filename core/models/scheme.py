# =============================================================================
# core/models/scheme.py - Scheme Schemas
# =============================================================================
# Schemes are read-only reference data: the catalog is seeded once when
# empty and never changed through the public API.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SchemeCreate(BaseModel):
    """Fields needed to insert a scheme into the catalog."""

    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    eligibility_criteria: str = Field(
        default="",
        description="Free-text eligibility rule shown to applicants"
    )


class Scheme(SchemeCreate):
    """
    A catalog entry as returned to clients.

    Example:
        {
            "id": "7d1c...",
            "name": "Welfare Scheme 1",
            "description": "Support for low-income families",
            "eligibilityCriteria": "Income < 100000"
        }
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID = Field(..., description="Unique scheme identifier")


# Inserted at startup when the catalog is empty
DEFAULT_SCHEMES: list[SchemeCreate] = [
    SchemeCreate(
        name="Welfare Scheme 1",
        description="Support for low-income families",
        eligibility_criteria="Income < 100000",
    ),
    SchemeCreate(
        name="Welfare Scheme 2",
        description="Education grant",
        eligibility_criteria="Student with GPA > 3.0",
    ),
]
