"""Account profile schemas and mutation payloads."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from ringtone_account.api.schemas.common import UpstreamModel
from ringtone_account.core.constants import DEFAULT_COUNTRY


class UserProfile(UpstreamModel):
    """The authenticated user as returned by the platform."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    balance: Decimal = Decimal("0")
    ringtone_points: int = 0
    referral_code: str | None = None


class ProfileUpdate(UpstreamModel):
    """Editable profile fields. Only the fields that are set are sent."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)


class PasswordChange(BaseModel):
    password: str


class TopUpRequest(BaseModel):
    """Wallet top-up amount in pounds."""

    amount: Decimal


class AddressForm(BaseModel):
    street: str = ""
    city: str = ""
    postcode: str = ""
    country: str = DEFAULT_COUNTRY


class TopUpCheckout(UpstreamModel):
    redirect_url: str | None = None
