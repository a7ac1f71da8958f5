"""Keywords and topics returned by the extraction service."""

from pydantic import BaseModel, ConfigDict, Field


class ExtractionResult(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    keywords: dict[str, float] = Field(
        default_factory=dict, description="Keyword to relevance weight"
    )
    topics: dict[str, float] = Field(
        default_factory=dict, description="Topic to relevance weight"
    )
