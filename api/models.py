"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class Book(BaseModel):
    """Book record as stored and returned by the API."""
    id: str = Field("", description="Unique book identifier")
    title: str = Field("", description="Book title")
    author: str = Field("", description="Book author")

    @field_validator("id", "title", "author", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """JSON null decodes to an empty string."""
        return "" if v is None else v


class BookUpdate(BaseModel):
    """Partial book payload; only the fields present are applied."""
    id: Optional[str] = Field(None, description="Ignored, the path id always wins")
    title: Optional[str] = Field(None, description="New title")
    author: Optional[str] = Field(None, description="New author")

    def changes(self) -> Dict[str, Any]:
        """Fields supplied by the client, without explicit nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class User(BaseModel):
    """Account that may log in."""
    id: str
    username: str
    password: str


class LoginRequest(BaseModel):
    """Login payload."""
    username: str = Field("", description="Account name")
    password: str = Field("", description="Account password")


class TokenResponse(BaseModel):
    """Login response carrying the signed bearer token."""
    token: str = Field(..., description="Signed bearer token")


class TokenClaims(BaseModel):
    """Claims carried by a verified token."""
    username: str
    exp: int = Field(..., description="Expiry as seconds since the epoch")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., description="Number of books in the store")
