"""Questionnaire answer models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class AnswerSetError(Exception):
    """Raised when an answer document cannot be loaded."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class Answer(BaseModel):
    """Answer to one question on the 1-5 Likert scale.

    A value of None together with is_na=False means "not answered yet".
    When is_na is True the value is always None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    question_id: str = Field(..., min_length=1)
    value: float | None = Field(default=None, ge=1.0, le=5.0)
    is_na: bool = False
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _na_clears_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("is_na"):
            return {**data, "value": None}
        return data


def load_answers(data: Any) -> list[Answer]:
    """Build an answer list from parsed JSON.

    Accepts either a list of answer objects or an object with an "answers" list.

    Raises:
        AnswerSetError: If the document has the wrong shape or an answer is invalid.
    """
    if isinstance(data, dict) and "answers" in data:
        data = data["answers"]
    if not isinstance(data, list):
        raise AnswerSetError(f"Answers must be a JSON list, got {type(data).__name__}")

    answers: list[Answer] = []
    errors: list[str] = []
    for i, item in enumerate(data):
        try:
            answers.append(Answer.model_validate(item))
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(p) for p in err["loc"])
                errors.append(f"[{i}].{loc}: {err['msg']}" if loc else f"[{i}]: {err['msg']}")
    if errors:
        raise AnswerSetError("Invalid answers", errors)
    return answers
