"""Model for a text to score, optionally with a keyword to insert."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from seo_scorer.app.config import settings


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: StrictStr = Field(
        ...,
        description="The text to score for SEO quality",
        max_length=settings.MAX_TEXT_LENGTH,
    )
    insert_keyword: StrictStr | None = Field(
        default=None,
        description="Keyword to splice into the text instead of scoring it",
    )

    @field_validator("text")
    @classmethod
    def _reject_blank_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please enter valid text.")
        return value
