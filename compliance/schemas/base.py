"""
Base Pydantic schemas.

This module contains base schemas with common configuration and the
annotated series types shared by report schemas.
"""

from typing import Annotated, Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict

from compliance.utils.daily_series import DailySeries, ensure_initialized


def _normalize_series(value: Any) -> List[Any]:
    if isinstance(value, DailySeries):
        return value.to_list()
    return ensure_initialized(value)


# Always exactly 31 entries once validated
FloatSeries = Annotated[List[Optional[float]], BeforeValidator(_normalize_series)]
TextSeries = Annotated[List[Optional[str]], BeforeValidator(_normalize_series)]


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All other schemas should inherit from this class.
    """

    model_config = ConfigDict(from_attributes=True)


class IDSchema(BaseSchema):
    """
    Schema with an opaque UUID identifier.
    """

    id: UUID


class CompanyScopedSchema(IDSchema):
    """
    Record owned by a company.
    """

    company_id: UUID
