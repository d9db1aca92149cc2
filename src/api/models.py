"""
Pydantic models for API request/response validation
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class UserRequest(BaseModel):
    """Request model for login and registration"""
    username: Optional[str] = Field(None, max_length=64)
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """Response model for a successful login"""
    session_id: str


class ChangePasswordRequest(BaseModel):
    """Request model for changing or resetting a password"""
    current: Optional[str] = None
    new: Optional[str] = None


class ImageUrlRequest(BaseModel):
    """Request model for updating the profile image of the current user"""
    image_url: Optional[str] = Field(None, max_length=2048)


class UserResponse(BaseModel):
    """Public user model (never contains the password hash)"""
    username: str
    is_admin: bool = False
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Active session of the current user"""
    id: str
    created_at: datetime
    current: bool = False


class ImageInfoResponse(BaseModel):
    """Image metadata"""
    id: UUID
    type: str
    size: int


class NotificationResponse(BaseModel):
    """Notification response model"""
    id: UUID
    text: str
    created_at: datetime

    class Config:
        from_attributes = True


class DeleteResponse(BaseModel):
    """Number of deleted items"""
    deleted: int
