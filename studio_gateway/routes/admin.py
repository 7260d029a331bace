"""
Admin session and booking notification routes.
Login is delegated to the backend; the returned token is kept in an httpOnly
cookie and forwarded upstream on later calls.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
import logging

from studio_gateway.schemas import Booking, LoginRequest, SendEmailRequest
from studio_gateway.services.backend_client import (
    BackendClient,
    BackendError,
    ForwardPayload,
    get_backend_client,
)
from studio_gateway.services.mailer import BookingMailer, get_mailer
from studio_gateway.utils.auth import clear_admin_cookie, require_admin_token, set_admin_cookie
from studio_gateway.utils.rate_limit import RATE_LIMITS, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login")
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    credentials: LoginRequest,
    client: BackendClient = Depends(get_backend_client),
):
    """
    Log an admin in through the backend and store the session cookie.

    Args:
        request: Incoming request (used by the rate limiter)
        credentials: Email and password, forwarded as JSON

    Returns:
        {"success": true, "user": ...} with the admin_token cookie set

    Raises:
        HTTPException: Backend status with its message when the login is rejected,
            500 if the backend cannot be reached or returns no token
    """
    logger.info(f"Login request received for {credentials.email}")
    try:
        result = await client.post("login", ForwardPayload(json=credentials.model_dump()))
    except BackendError as e:
        logger.warning(f"Backend rejected login for {credentials.email}: {e.status_code}")
        raise HTTPException(status_code=e.status_code, detail={"message": e.message or "Login failed"})
    except Exception as e:
        logger.error(f"Login request failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Server error"},
        )

    data = result.data if isinstance(result.data, dict) else {}
    token = data.get("token")
    if not token:
        logger.error("Backend accepted the login but returned no token")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Login failed"},
        )

    response = JSONResponse(content={"success": True, "user": data.get("user")})
    set_admin_cookie(response, token)
    logger.info("Login successful, session cookie set")
    return response


@router.post("/logout")
async def logout():
    """Drop the admin session cookie."""
    response = JSONResponse(content={"success": True})
    clear_admin_cookie(response)
    return response


@router.post("/bookings/send-email")
@limiter.limit(RATE_LIMITS["email"])
async def send_booking_email(
    request: Request,
    email_request: SendEmailRequest,
    token: str = Depends(require_admin_token),
    client: BackendClient = Depends(get_backend_client),
    mailer: BookingMailer = Depends(get_mailer),
):
    """
    Email a booking's client about their booking.

    Args:
        email_request: bookingId, customMessage and emailType
            (confirmation, update, cancellation or custom)
        token: Admin session token (injected by dependency)

    Returns:
        {"success": true, "message": ..., "messageId": ...}

    Raises:
        HTTPException: 401 without session, 404 if the backend rejects the booking lookup,
            500 if the backend is unreachable or rendering or delivery fails
    """
    try:
        booking_result = await client.get(f"admin/bookings/{email_request.booking_id}", token=token)
    except BackendError as e:
        logger.warning(f"Booking {email_request.booking_id} lookup failed: {e.status_code}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"message": "Booking not found"})
    except Exception as e:
        logger.error(f"Error fetching booking {email_request.booking_id}: {str(e)}", exc_info=True)
        raise send_failed(e)

    try:
        body = booking_result.data if isinstance(booking_result.data, dict) else {}
        booking = Booking.model_validate(body.get("booking") or body)

        message_id = await mailer.send_booking_notification(
            booking, email_request.custom_message, email_request.email_type
        )
    except Exception as e:
        logger.error(f"Email sending error: {str(e)}", exc_info=True)
        raise send_failed(e)

    logger.info(f"Booking {email_request.booking_id} {email_request.email_type} email sent: {message_id}")
    return {"success": True, "message": "Email sent successfully", "messageId": message_id}


def send_failed(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"success": False, "message": "Failed to send email", "error": str(error)},
    )
