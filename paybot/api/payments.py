from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from ..container import Container, get_container
from ..core.payments.models import Recipient


router = APIRouter(prefix="/payments")


class PaymentPreviewRequest(BaseModel):
    message: str = Field(description="Chat message, e.g. 'send 0.0001 ETH to @Cris'")
    event_id: str = Field(min_length=1, description="Triggering event id; becomes the request id suffix")
    recipient_address: str = Field(description="Recipient smart account address")
    recipient_user_id: Optional[str] = Field(default=None, description="Recipient chat identity")
    recipient_display_name: Optional[str] = Field(default=None, description="Name shown in the request title")


class PaymentPreviewResponse(BaseModel):
    id: str
    title: str
    content: Dict[str, Any]


@router.post("/preview")
async def post_payment_preview(
    req: PaymentPreviewRequest,
    container: Container = Depends(get_container),
) -> PaymentPreviewResponse:
    """Build the interaction request a chat message would produce, without sending it."""
    result = await container.builder.build(
        message=req.message,
        event_id=req.event_id,
        recipient=Recipient(
            user_id=req.recipient_user_id or req.recipient_address,
            address=req.recipient_address,
            display_name=req.recipient_display_name,
        ),
    )
    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail={"kind": result.kind.value, "message": result.message},
        )
    return PaymentPreviewResponse(**result.value.to_dict())
