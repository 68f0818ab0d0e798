"""Pydantic request/response models for the Notifications API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from pydantic import BaseModel, Field


class ConfigureWhatsAppRequest(BaseModel):
    store_name: str | None = None
    auth_key: str = Field(..., min_length=1)
    whatsapp_number: str = Field(..., pattern=r"^\d{10,15}$", examples=["919876543210"])


class ToggleWhatsAppRequest(BaseModel):
    enabled: bool


class MessagingProfileResponse(BaseModel):
    store_id: str
    store_name: str | None = None
    auth_key: str = Field(..., description="Masked; only the last four characters are shown")
    whatsapp_number: str | None = None
    credentials_verified: bool
    whatsapp_notifications_enabled: bool


class ProfileIdResponse(BaseModel):
    profile_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
