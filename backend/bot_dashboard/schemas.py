# Data objects for the bot dashboard.
# BotEventIn is what the intake bot POSTs; the *Out models shape the
# dashboard responses.

import json

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


def _text_or_none(value: Any) -> Optional[str]:
    # truthiness is judged on the raw JSON value, before it becomes text
    if not value:
        return None
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


class BotEventIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: Optional[str] = None  # PARSED | SAVED (others stored verbatim)
    tpa: Optional[str] = None
    patient_name: Optional[str] = Field(default=None, alias="patientName")
    al_number: Optional[str] = Field(default=None, alias="alNumber")
    policy_number: Optional[str] = Field(default=None, alias="policyNumber")
    hospital_group: Optional[str] = Field(default=None, alias="hospitalGroup")

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    def is_valid(self) -> bool:
        return bool(self.status) and bool(self.tpa)


class CountsOut(BaseModel):
    parsed: int
    saved: int


class HospitalCountOut(BaseModel):
    hospital_group: Optional[str] = None
    count: int


class TpaCountOut(BaseModel):
    tpa_name: Optional[str] = None
    count: int
