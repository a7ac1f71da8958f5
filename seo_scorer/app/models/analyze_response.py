"""Response model for an SEO score."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    keywords: list[str] = Field(..., description="Keywords ranked by relevance")
    score: int = Field(..., ge=0, le=100, description="SEO score")
    score_category: str = Field(
        ..., description="One of very-low, low, medium or high"
    )
    topic: str = Field(..., description="Primary topic of the text")
    topic_score: float = Field(default=0.0, description="Weight of the primary topic")
    total_keywords: int = Field(default=0, description="Number of keywords returned")
    text_length: int = Field(..., description="Length of the trimmed text")
    word_count: int = Field(..., description="Whitespace-separated word count")
    tips: list[str] = Field(
        default_factory=list, description="Suggestions for improving the score"
    )
    message: str | None = Field(
        default=None, description="Explanation when the text was not scored"
    )
