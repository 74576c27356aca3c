"""Pydantic models for generation results and stored reports.

Field names are snake_case in Python; the camelCase aliases
(``storeCategory``, ``originalStory``, ...) are the JSON payload keys.
Both spellings are accepted on input.
"""
from __future__ import annotations

from typing import Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.competencies import COMPETENCY_CODES, STORE_CATEGORY_CODES
from core.errors import ValidationError

DEFAULT_REPORT_NAME = "未命名報告"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class StarFields(BaseModel):
    """The four STAR sections, each roughly 50-100 words."""
    situation: str
    task: str
    action: str
    result: str


class GenerationResult(StarFields):
    """Transient output of GenerationService.generate(); never persisted as-is."""
    model_config = ConfigDict(populate_by_name=True)

    competency: str
    store_category: str = Field(alias="storeCategory")
    original_story: str = Field(alias="originalStory")
    parse_strategy: str = Field("json", alias="parseStrategy")
    model: Optional[str] = None
    raw_response: Optional[str] = Field(None, alias="rawResponse")

    @property
    def degraded(self):
        return self.parse_strategy == "positional"

    def to_payload(self):
        """JSON body for the ``data`` key of a generate response."""
        return self.model_dump(by_alias=True, exclude={"raw_response"})


# ---------------------------------------------------------------------------
# Stored reports
# ---------------------------------------------------------------------------

class ReportCreate(BaseModel):
    """Validated input for ReportStore.create_report()."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = DEFAULT_REPORT_NAME
    situation: str = Field(min_length=1)
    task: str = Field(min_length=1)
    action: str = Field(min_length=1)
    result: str = Field(min_length=1)
    competency: str
    store_category: str = Field(alias="storeCategory")
    original_story: Optional[str] = Field(None, alias="originalStory")

    @field_validator("name", mode="before")
    @classmethod
    def default_blank_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_REPORT_NAME
        return v

    @field_validator("competency")
    @classmethod
    def known_competency(cls, v):
        if v not in COMPETENCY_CODES:
            raise ValueError(f"must be one of: {', '.join(COMPETENCY_CODES)}")
        return v

    @field_validator("store_category")
    @classmethod
    def known_store_category(cls, v):
        if v not in STORE_CATEGORY_CODES:
            raise ValueError(f"must be one of: {', '.join(STORE_CATEGORY_CODES)}")
        return v


def _error_field(err):
    loc = err.get("loc") or ("__root__",)
    return ".".join(str(part) for part in loc)


def validate_report(fields):
    """Validate raw report fields, returning a ReportCreate.

    Raises:
        ValidationError: naming every missing or invalid field.
    """
    if not isinstance(fields, dict):
        raise ValidationError("Report fields must be an object", fields=[])
    try:
        return ReportCreate.model_validate(fields)
    except pydantic.ValidationError as e:
        errors = e.errors()
        names = []
        for err in errors:
            name = _error_field(err)
            if name not in names:
                names.append(name)
        details = "; ".join(f"{_error_field(err)}: {err['msg']}" for err in errors)
        raise ValidationError(f"Invalid report fields: {details}", fields=names)
