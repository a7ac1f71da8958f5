"""Response model for keyword insertion."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InsertKeywordResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    updated_text: str = Field(..., description="Text with the keyword inserted")
