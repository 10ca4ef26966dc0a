"""Customer identity and review models."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """The single signed-in user of a session."""
    id: str
    name: str
    email: EmailStr


class Credentials(BaseModel):
    """Login/signup form input. Passwords are accepted but never verified."""
    email: EmailStr
    password: str = ""
    name: Optional[str] = None


class Review(BaseModel):
    """Customer review. Never mutated once posted."""
    id: int
    name: str
    rating: int = Field(..., ge=1, le=5)
    text: str
    date: str = "Just now"
