from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class AadhaarRecord(BaseModel):
    id_number: Optional[str] = None  # "1234 5678 9012"
    name: Optional[str] = None
    dob: Optional[str] = None  # DD/MM/YYYY
    yob: Optional[str] = None
    gender: Optional[str] = None  # MALE, FEMALE, TRANSGENDER, OTHERS
    address: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool
    message: str
