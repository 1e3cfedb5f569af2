from typing import Any
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import AnalysisServiceError, InvalidResult

ANALYSIS_INSTRUCTION = (
    "Analyze this traffic/surveillance camera frame for smart city management. "
    "Detect counts for people and vehicles. Assess density and flow. Provide a risk score. "
    "IMPORTANT: Maintain privacy - DO NOT identify individuals or specific faces. "
    "Focus on aggregate flow and safety metrics."
)

DENSITY_LEVELS = ["Low", "Medium", "High", "Critical"]
TRAFFIC_FLOWS = ["Smooth", "Moderate", "Congested", "Stalled"]

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "peopleCount": {"type": "INTEGER", "description": "Estimated number of people visible"},
        "vehicleCount": {"type": "INTEGER", "description": "Estimated number of vehicles visible"},
        "density": {"type": "STRING", "enum": DENSITY_LEVELS, "description": "General density level"},
        "flow": {"type": "STRING", "enum": TRAFFIC_FLOWS, "description": "Traffic flow status"},
        "riskScore": {"type": "INTEGER", "description": "Safety risk score from 0-100"},
        "summary": {"type": "STRING", "description": "Brief visual summary (anonymized)"},
        "prediction": {
            "type": "STRING",
            "description": "Short-term trend prediction (e.g., 'Likely to increase in 10 mins')"
        },
    },
    "required": ["peopleCount", "vehicleCount", "density", "flow", "riskScore", "summary", "prediction"],
}

# Constraint violations on a well-formed payload; anything else means the response is malformed.
_RANGE_ERROR_TYPES = {"greater_than_equal", "less_than_equal"}


class AnalysisPayload(BaseModel):
    """
    Aggregate scene analysis as returned by the external vision service.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    people_count: int = Field(..., alias="peopleCount", ge=0, description="Estimated number of people visible")
    vehicle_count: int = Field(..., alias="vehicleCount", ge=0, description="Estimated number of vehicles visible")
    density: str = Field(..., pattern=f"^({'|'.join(DENSITY_LEVELS)})$", description="General density level")
    flow: str = Field(..., pattern=f"^({'|'.join(TRAFFIC_FLOWS)})$", description="Traffic flow status")
    risk_score: int = Field(..., alias="riskScore", ge=0, le=100, description="Safety risk score from 0-100")
    summary: str = Field(..., description="Brief visual summary (anonymized)")
    prediction: str = Field(..., description="Short-term trend prediction")


def parse_analysis_payload(data: Any) -> AnalysisPayload:
    """
    Validates a decoded analyzer response.

    Raises:
        AnalysisServiceError: payload is not an object, misses fields or has wrong types.
        InvalidResult: payload is well-formed but a value is out of range.
    """
    if not isinstance(data, dict):
        raise AnalysisServiceError(
            f"Malformed analysis response: expected an object, got {type(data).__name__}"
        )
    try:
        return AnalysisPayload.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        if errors and all(err["type"] in _RANGE_ERROR_TYPES for err in errors):
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in errors)
            raise InvalidResult(f"Analysis result out of range: {fields}") from e
        raise AnalysisServiceError(f"Malformed analysis response: {e.error_count()} validation error(s)") from e
