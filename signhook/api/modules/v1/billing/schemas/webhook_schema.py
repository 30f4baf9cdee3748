from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StripeEventData(BaseModel):
    object: Dict[str, Any]

    model_config = ConfigDict(extra="allow")


class StripeWebhookEvent(BaseModel):
    """
    Verified Stripe event envelope.

    Only the fields the router relies on are required; everything else Stripe
    sends is kept as extra data.
    """

    id: str
    type: str
    data: StripeEventData
    created: Optional[int] = None
    livemode: Optional[bool] = None
    api_version: Optional[str] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def data_object(self) -> Dict[str, Any]:
        return self.data.object


class CheckoutSessionPayload(BaseModel):
    """The parts of a checkout.session object used for pledge provisioning."""

    id: str
    client_reference_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("metadata", mode="before")
    @classmethod
    def _none_metadata_is_empty(cls, value: Any) -> Any:
        return value or {}

    @property
    def source(self) -> Optional[str]:
        return self.metadata.get("source")

    @property
    def signature_text(self) -> Optional[str]:
        return self.metadata.get("signatureText") or None

    @property
    def signature_data_url_ref(self) -> Optional[str]:
        return self.metadata.get("signatureDataUrl") or None
