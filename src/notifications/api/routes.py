"""FastAPI routes for the Notifications domain.

Thin adapters that translate HTTP requests into domain commands.
"""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from notifications.api.schemas import (
    ConfigureWhatsAppRequest,
    MessagingProfileResponse,
    ProfileIdResponse,
    StatusResponse,
    ToggleWhatsAppRequest,
)
from notifications.messaging.management import (
    ConfigureWhatsAppCredentials,
    SetWhatsAppNotifications,
    VerifyWhatsAppCredentials,
)
from notifications.messaging.profile import profile_for_store

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _process(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc


@router.get("/stores/{store_id}/whatsapp", response_model=MessagingProfileResponse)
async def get_messaging_profile(store_id: str) -> MessagingProfileResponse:
    profile = profile_for_store(store_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="No messaging profile for this store")
    return MessagingProfileResponse(
        store_id=str(profile.store_id),
        store_name=profile.store_name,
        auth_key=profile.masked_auth_key(),
        whatsapp_number=profile.msg91_whatsapp_number,
        credentials_verified=profile.credentials_verified,
        whatsapp_notifications_enabled=profile.whatsapp_notifications_enabled,
    )


@router.put("/stores/{store_id}/whatsapp", response_model=ProfileIdResponse)
async def configure_whatsapp(store_id: str, body: ConfigureWhatsAppRequest) -> ProfileIdResponse:
    profile_id = _process(
        ConfigureWhatsAppCredentials(
            store_id=store_id,
            store_name=body.store_name,
            auth_key=body.auth_key,
            whatsapp_number=body.whatsapp_number,
        )
    )
    return ProfileIdResponse(profile_id=profile_id)


@router.post("/stores/{store_id}/whatsapp/verify", response_model=StatusResponse)
async def verify_whatsapp(store_id: str) -> StatusResponse:
    _process(VerifyWhatsAppCredentials(store_id=store_id))
    return StatusResponse()


@router.put("/stores/{store_id}/whatsapp/enabled", response_model=StatusResponse)
async def toggle_whatsapp(store_id: str, body: ToggleWhatsAppRequest) -> StatusResponse:
    _process(SetWhatsAppNotifications(store_id=store_id, enabled=body.enabled))
    return StatusResponse()
