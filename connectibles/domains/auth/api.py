from fastapi import APIRouter

from .schemas import OtpRequest, OtpVerifyRequest, TokenResponse
from .service import request_sign_in_code, verify_sign_in_code

router = APIRouter()


@router.post("/otp/request")
async def request_code(request: OtpRequest):
    """Email a one-time sign-in code"""
    return await request_sign_in_code(request.email)


@router.post("/otp/verify", response_model=TokenResponse)
async def verify_code(request: OtpVerifyRequest):
    """Exchange the emailed code for a bearer token"""
    return await verify_sign_in_code(request.email, request.code)
