"""Passkey registration and login endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status

from fingerprint_wallet.core.security import create_access_token, get_current_username
from fingerprint_wallet.interfaces.http.deps import get_ceremony_service, get_rp_id
from fingerprint_wallet.modules.ceremony import (
    CredentialAssertion,
    CredentialMismatchError,
    DuplicateUserError,
    NoPendingChallengeError,
    UserNotFoundError,
)
from fingerprint_wallet.modules.ceremony.service import CeremonyService
from fingerprint_wallet.schemas import (
    AuthenticationOptionsResponse,
    CeremonyCompleteRequest,
    CredentialDescriptor,
    CredentialPayload,
    LoginCompleteResponse,
    PublicKeyCredentialParameters,
    RegistrationCompleteResponse,
    RegistrationOptionsResponse,
    RelyingPartyEntity,
    SessionResponse,
    UserEntity,
    UserResponse,
    UsernameRequest,
)

router = APIRouter()


def _require_username(username: str | None) -> str:
    if not username:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is required")
    return username


def _require_completion(payload: CeremonyCompleteRequest) -> tuple[str, CredentialPayload]:
    if not payload.username or payload.credential is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and credential are required",
        )
    return payload.username, payload.credential


def _to_assertion(credential: CredentialPayload) -> CredentialAssertion:
    public_key = credential.response.public_key if credential.response else None
    return CredentialAssertion(id=credential.id, public_key=public_key)


@router.post("/register/start", response_model=RegistrationOptionsResponse, summary="Begin passkey registration")
async def register_start(
    payload: UsernameRequest,
    rp_id: str = Depends(get_rp_id),
    service: CeremonyService = Depends(get_ceremony_service),
) -> RegistrationOptionsResponse:
    username = _require_username(payload.username)
    try:
        options = await service.begin_registration(username, rp_id)
    except DuplicateUserError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists") from exc

    return RegistrationOptionsResponse(
        challenge=options.challenge,
        rp=RelyingPartyEntity(name=options.rp_name, id=options.rp_id),
        user=UserEntity(id=options.user_id, name=options.username, display_name=options.username),
        pub_key_cred_params=[PublicKeyCredentialParameters(alg=alg) for alg in options.algorithms],
        timeout=options.timeout_ms,
    )


@router.post("/register/complete", response_model=RegistrationCompleteResponse, summary="Store the new passkey")
async def register_complete(
    payload: CeremonyCompleteRequest,
    service: CeremonyService = Depends(get_ceremony_service),
) -> RegistrationCompleteResponse:
    username, credential = _require_completion(payload)
    try:
        await service.complete_registration(username, _to_assertion(credential))
    except NoPendingChallengeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired challenge") from exc
    except DuplicateUserError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists") from exc

    return RegistrationCompleteResponse(message="Fingerprint registered successfully!", username=username)


@router.post("/login/start", response_model=AuthenticationOptionsResponse, summary="Begin passkey login")
async def login_start(
    payload: UsernameRequest,
    rp_id: str = Depends(get_rp_id),
    service: CeremonyService = Depends(get_ceremony_service),
) -> AuthenticationOptionsResponse:
    username = _require_username(payload.username)
    try:
        options = await service.begin_authentication(username, rp_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc

    return AuthenticationOptionsResponse(
        challenge=options.challenge,
        rp_id=options.rp_id,
        allow_credentials=[CredentialDescriptor(id=options.credential_id)],
        timeout=options.timeout_ms,
    )


@router.post("/login/complete", response_model=LoginCompleteResponse, summary="Finish passkey login")
async def login_complete(
    payload: CeremonyCompleteRequest,
    service: CeremonyService = Depends(get_ceremony_service),
) -> LoginCompleteResponse:
    username, credential = _require_completion(payload)
    try:
        result = await service.complete_authentication(username, _to_assertion(credential))
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    except NoPendingChallengeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired challenge") from exc
    except CredentialMismatchError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication failed") from exc

    return LoginCompleteResponse(
        message="Login successful!",
        username=result.username,
        login_time=result.login_time,
        access_token=create_access_token(result.username),
    )


@router.get("/user/{username}", response_model=UserResponse, summary="Public registration info")
async def get_user(
    username: str,
    service: CeremonyService = Depends(get_ceremony_service),
) -> UserResponse:
    user = await service.get_user(username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse(username=user.username, registered_at=user.registered_at)


@router.get("/session", response_model=SessionResponse, summary="Who the bearer token belongs to")
async def current_session(username: str = Depends(get_current_username)) -> SessionResponse:
    return SessionResponse(username=username)
