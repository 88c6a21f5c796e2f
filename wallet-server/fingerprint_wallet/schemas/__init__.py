"""Pydantic schemas used across the project.

Wire names are camelCase, matching what the browser WebAuthn API and the
frontend expect; Python attribute names stay snake_case.
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fingerprint_wallet.db.models import (
    ADDRESS_LENGTH,
    CREDENTIAL_ID_LENGTH,
    MAX_BALANCE,
    USERNAME_LENGTH,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenData(BaseModel):
    username: str


# ---- ceremony requests ----------------------------------------------------


class UsernameRequest(BaseModel):
    username: Optional[str] = Field(default=None, max_length=USERNAME_LENGTH)


class AuthenticatorResponsePayload(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    public_key: Optional[str] = None
    client_data_json: Optional[str] = Field(default=None, alias="clientDataJSON")
    attestation_object: Optional[str] = None
    authenticator_data: Optional[str] = None
    signature: Optional[str] = None
    user_handle: Optional[str] = None


class CredentialPayload(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1, max_length=CREDENTIAL_ID_LENGTH)
    raw_id: Optional[str] = None
    type: Optional[str] = "public-key"
    response: Optional[AuthenticatorResponsePayload] = None


class CeremonyCompleteRequest(BaseModel):
    username: Optional[str] = Field(default=None, max_length=USERNAME_LENGTH)
    credential: Optional[CredentialPayload] = None


# ---- ceremony responses ---------------------------------------------------


class RelyingPartyEntity(CamelModel):
    name: str
    id: str


class UserEntity(CamelModel):
    id: str
    name: str
    display_name: str


class PublicKeyCredentialParameters(CamelModel):
    alg: int
    type: Literal["public-key"] = "public-key"


class AuthenticatorSelection(CamelModel):
    authenticator_attachment: Literal["platform", "cross-platform"] = "platform"
    user_verification: Literal["required", "preferred", "discouraged"] = "required"
    require_resident_key: bool = False


class RegistrationOptionsResponse(CamelModel):
    challenge: str
    rp: RelyingPartyEntity
    user: UserEntity
    pub_key_cred_params: list[PublicKeyCredentialParameters]
    authenticator_selection: AuthenticatorSelection = Field(default_factory=AuthenticatorSelection)
    timeout: int
    attestation: Literal["none", "indirect", "direct"] = "none"


class CredentialDescriptor(CamelModel):
    id: str
    type: Literal["public-key"] = "public-key"


class AuthenticationOptionsResponse(CamelModel):
    challenge: str
    rp_id: str
    allow_credentials: list[CredentialDescriptor]
    user_verification: Literal["required", "preferred", "discouraged"] = "required"
    timeout: int


class RegistrationCompleteResponse(CamelModel):
    success: bool = True
    message: str
    username: str


class LoginCompleteResponse(CamelModel):
    success: bool = True
    message: str
    username: str
    login_time: datetime
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    username: str
    registered_at: datetime


class SessionResponse(CamelModel):
    username: str


# ---- wallets --------------------------------------------------------------


class WalletCreateRequest(BaseModel):
    username: Optional[str] = Field(default=None, max_length=USERNAME_LENGTH)
    balance: Optional[int] = Field(default=None, ge=0, le=MAX_BALANCE)
    address: Optional[str] = Field(default=None, max_length=ADDRESS_LENGTH)
    transactions: Optional[list[Any]] = None


class WalletUpdateRequest(BaseModel):
    balance: Optional[int] = Field(default=None, ge=0, le=MAX_BALANCE)
    address: Optional[str] = Field(default=None, max_length=ADDRESS_LENGTH)
    transactions: Optional[list[Any]] = None


class WalletResponse(CamelModel):
    username: str
    balance: int
    address: str
    transactions: list[Any] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WalletMutationResponse(CamelModel):
    success: bool = True
    message: str
    wallet: WalletResponse


class WalletListResponse(CamelModel):
    success: bool = True
    wallets: list[WalletResponse]


# ---- transfers ------------------------------------------------------------


class TransferRequest(BaseModel):
    sender: Optional[str] = Field(default=None, max_length=USERNAME_LENGTH)
    receiver: Optional[str] = Field(default=None, max_length=USERNAME_LENGTH)
    amount: Optional[int] = Field(default=None, le=MAX_BALANCE)


class SendResponse(CamelModel):
    success: bool = True
    message: str


class TransferResponse(CamelModel):
    success: bool = True
    message: str
    transaction_id: Optional[str] = None


class TransactionResponse(CamelModel):
    id: str
    sender: str
    receiver: str
    amount: int
    created_at: datetime


class TransactionListResponse(CamelModel):
    success: bool = True
    transactions: list[TransactionResponse]


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str
    endpoints: dict[str, str]
