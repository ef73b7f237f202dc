"""
Security utilities and authentication
"""

import time
from collections import defaultdict

from fastapi import HTTPException, Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import settings
from app.utils.responses import rate_limit_error

# Simple in-memory rate limiter: client ip -> request timestamps
rate_limiter = defaultdict(list)

security = HTTPBearer()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify admin authentication token"""
    if credentials.credentials != settings.ADMIN_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Sliding one-minute window per client IP"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    prune_rate_limiter(current_time)

    recent = rate_limiter.get(client_ip, [])
    if len(recent) >= limit:
        return False

    rate_limiter[client_ip] = recent + [current_time]
    return True

def prune_rate_limiter(current_time: float = None) -> None:
    """Drop timestamps older than a minute and forget clients left with none"""
    if current_time is None:
        current_time = time.time()
    minute_ago = current_time - 60

    for client_ip in list(rate_limiter):
        recent = [req_time for req_time in rate_limiter[client_ip] if req_time > minute_ago]
        if recent:
            rate_limiter[client_ip] = recent
        else:
            del rate_limiter[client_ip]

def get_client_ip(request: Request) -> str:
    """Extract client IP from request"""
    # Reverse proxies put the original address first
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def enforce_rate_limit(request: Request) -> None:
    """Dependency rejecting clients over the per-minute limit"""
    if not rate_limit_check(get_client_ip(request)):
        rate_limit_error()
