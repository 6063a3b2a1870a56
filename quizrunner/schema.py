from __future__ import annotations

"""Pydantic models for question records as they arrive from a source.

Only the wire format is checked here; the validated record is turned into the
immutable `models.Question` used by the session.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError, model_validator

__all__ = ["QuestionRecord", "ValidationError", "describe_errors"]


class QuestionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: Optional[Union[StrictBool, StrictStr, StrictInt, StrictFloat]] = None
    text: StrictStr = Field(min_length=1)
    choices: List[StrictStr] = Field(min_length=2)
    correct_index: StrictInt = Field(alias="correctIndex")
    explanation: Optional[StrictStr] = None

    @model_validator(mode="after")
    def _index_in_range(self) -> "QuestionRecord":
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(
                f"correctIndex {self.correct_index} out of range for {len(self.choices)} choices"
            )
        return self


def describe_errors(exc: ValidationError) -> str:
    """One-line summary of a ValidationError: `field: message; ...`."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
