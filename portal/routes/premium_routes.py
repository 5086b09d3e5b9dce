"""Premium key activation and session status routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from common.constants import SESSION_COOKIE_NAME, SESSION_TTL
from portal.deps import get_access_gate, get_premium_access, get_session_token
from portal.schemas.premium import ActivateRequest, ActivateResponse, PremiumStatusResponse
from portal.services.access_gate import AccessGate, PremiumAccess

router = APIRouter(prefix="/premium", tags=["Premium"])


@router.post("/activate", response_model=ActivateResponse)
async def activate(
    body: ActivateRequest,
    request: Request,
    response: Response,
    gate: AccessGate = Depends(get_access_gate),
):
    """
    Redeem a premium key and start a session.

    On success the session token is set as an httpOnly cookie scoped to the
    whole site, lasting as long as the session record.

    Returns:
        - ok: true, expiry_date of the key

    Raises:
        - 400: {"ok": false, "error": "Invalid or expired key"}
    """
    result = await gate.activate_key(body.key)

    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ActivateResponse(ok=False, error=result.error).model_dump(mode="json", exclude_none=True),
        )

    response.set_cookie(
        SESSION_COOKIE_NAME,
        result.session_token,
        max_age=int(SESSION_TTL.total_seconds()),
        httponly=True,
        secure=request.app.state.settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return ActivateResponse(ok=True, expiry_date=result.premium_key.expiry_date)


@router.get("/status", response_model=PremiumStatusResponse)
async def premium_status(access: PremiumAccess = Depends(get_premium_access)):
    """
    Report whether the caller's session currently grants premium access.
    """
    if not access.authorized:
        return PremiumStatusResponse(authorized=False)
    return PremiumStatusResponse(
        authorized=True,
        owner=access.key_info.owner,
        expiry_date=access.key_info.expiry_date,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    gate: AccessGate = Depends(get_access_gate),
):
    """
    End the caller's session and clear the cookie.
    """
    await gate.end_session(session_token)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
