"""
Centralized auth context storage for the app.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status

from auth.rate_limiter import LoginRateLimiter
from auth.session_manager import SessionManager


@dataclass(frozen=True)
class AuthContext:
    session_manager: SessionManager
    rate_limiter: LoginRateLimiter
    config: Dict[str, Any] = field(default_factory=dict)


def set_auth_context(
    app,
    session_manager: SessionManager,
    rate_limiter: LoginRateLimiter,
    config: Dict[str, Any],
) -> None:
    """Attach auth context to the FastAPI app state."""
    app.state.auth_context = AuthContext(
        session_manager=session_manager,
        rate_limiter=rate_limiter,
        config=config,
    )


def get_auth_context(request: Request) -> AuthContext:
    """Fetch auth context from the FastAPI app state."""
    context: Optional[AuthContext] = getattr(request.app.state, "auth_context", None)
    if not context:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not initialized",
        )
    return context
