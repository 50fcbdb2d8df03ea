"""Authentication routes forwarding to the hosted auth provider."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..clients.auth_provider import AuthSessionResult, Identity
from ..database import get_session
from ..models import Profile
from ..schemas import AuthResponse, MeResponse, ProfileResponse, SignInRequest, SignUpRequest
from ..services import ensure_profile, get_access_token, get_current_identity, sign_in, sign_out, sign_up

router = APIRouter(prefix="/auth", tags=["auth"])


def _to_auth_response(result: AuthSessionResult, profile: Profile | None) -> AuthResponse:
    return AuthResponse(
        user_id=result.identity.id,
        email=result.identity.email,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=result.expires_in,
        confirmation_required=result.access_token is None,
        profile=ProfileResponse.model_validate(profile) if profile is not None else None,
    )


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up_endpoint(
    payload: SignUpRequest,
    db: Session = Depends(get_session),
) -> AuthResponse:
    result, profile = await sign_up(db, payload)
    return _to_auth_response(result, profile)


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in_endpoint(
    payload: SignInRequest,
    db: Session = Depends(get_session),
) -> AuthResponse:
    result, profile = await sign_in(db, str(payload.email), payload.password)
    return _to_auth_response(result, profile)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out_endpoint(access_token: str = Depends(get_access_token)) -> Response:
    await sign_out(access_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=MeResponse)
async def me_endpoint(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_session),
) -> MeResponse:
    profile = ensure_profile(db, identity)
    return MeResponse(user_id=identity.id, email=identity.email, profile=ProfileResponse.model_validate(profile))
