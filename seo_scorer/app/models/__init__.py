"""Initialize the models package."""

from .analyze_request import AnalyzeRequest
from .analyze_response import AnalyzeResponse
from .extraction_result import ExtractionResult
from .insert_keyword_response import InsertKeywordResponse

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ExtractionResult",
    "InsertKeywordResponse",
]
