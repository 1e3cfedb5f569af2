from .analysis import (
    AnalysisPayload,
    parse_analysis_payload,
    ANALYSIS_INSTRUCTION,
    ANALYSIS_RESPONSE_SCHEMA,
)

__all__ = [
    "AnalysisPayload",
    "parse_analysis_payload",
    "ANALYSIS_INSTRUCTION",
    "ANALYSIS_RESPONSE_SCHEMA",
]
