from typing import List

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    models: List[str]


class ErrorResponse(BaseModel):
    error: str
