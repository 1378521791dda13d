from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Schema for error responses"""

    detail: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service status")
    lessons: int = Field(..., description="Number of indexed lessons")
    sections: int = Field(..., description="Number of configured sections")
