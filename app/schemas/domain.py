from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Sentiment = Literal["optimistic", "cautious", "neutral", "pessimistic"]
ConfidenceLevel = Literal["high", "medium", "low"]


def _as_text(value):
    # Models often emit the fiscal year as a bare number, or null for absent text.
    if value is None:
        return ""
    if isinstance(value, (int, float, bool)):
        return str(value)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FinancialLineItem(CamelModel):
    description: str = ""
    value: Union[int, float, str, None] = None
    currency: Optional[str] = None
    unit: Optional[str] = Field(default=None, description="e.g. 'millions', 'thousands'")
    original_description: Optional[str] = Field(
        default=None,
        description="Label as printed in the document before mapping to the standard line",
    )

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, value):
        return _as_text(value)

    @field_validator("currency", "unit", "original_description", mode="before")
    @classmethod
    def coerce_optional_text(cls, value):
        return None if value is None else _as_text(value)


class FinancialData(CamelModel):
    company_name: str = ""
    period: str = ""
    year: str = ""
    income_statement: List[FinancialLineItem] = Field(default_factory=list)
    balance_sheet: Optional[List[FinancialLineItem]] = None
    cash_flow: Optional[List[FinancialLineItem]] = None

    sentiment: Sentiment = "neutral"
    confidence_detail: ConfidenceLevel = "medium"
    key_positives: List[str] = Field(default_factory=list)
    key_concerns: List[str] = Field(default_factory=list)
    forward_guidance: str = ""
    capacity_utilization: str = ""
    growth_initiatives: List[str] = Field(default_factory=list)

    # Only the two enumerations are enforced; everything else is best-effort model text.
    @field_validator("sentiment", "confidence_detail", mode="before")
    @classmethod
    def normalize_enum(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator(
        "company_name", "period", "year", "forward_guidance", "capacity_utilization",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value):
        return _as_text(value)

    @field_validator("income_statement", mode="before")
    @classmethod
    def coerce_line_items(cls, value):
        return [] if value is None else value

    @field_validator("key_positives", "key_concerns", "growth_initiatives", mode="before")
    @classmethod
    def coerce_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [entry if isinstance(entry, str) else str(entry) for entry in value if entry is not None]
        return value


class ExtractionResult(BaseModel):
    data: Optional[FinancialData] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.error
