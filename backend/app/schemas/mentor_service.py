"""Mentor service pricing schemas (wire names follow the existing frontend)."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from ._strict_base import CamelResponseModel, StrictRequestModel


class MentorServicesUpdate(StrictRequestModel):
    """
    Body of ``PUT /dashboard/mentor/services``.

    Items are checked by the pricing validator, which reports the first
    problem with a specific message.
    """

    services: Any = Field(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "services": [
                    {
                        "mentorshipService": "Career guidance",
                        "mentorSessionPrice": 100,
                        "platformFee": 14,
                        "taxesFee": 26,
                        "totalPrice": 140,
                    }
                ]
            }
        }
    )


class MentorServiceResponse(CamelResponseModel):
    id: str
    mentor_id: str
    service_name: str = Field(alias="mentorshipService")
    mentor_price: int = Field(alias="mentorSessionPrice")
    platform_fee: int
    taxes_fee: int
    total_price: int
    created_at: datetime
    updated_at: datetime
