# pinmap/schemas/common.py
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Error kind, e.g. ValidationError")
    message: str = Field(description="Human-readable message")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "ValidationError",
                    "message": "Radius must be a number between 1 and 10000 meters",
                }
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}
