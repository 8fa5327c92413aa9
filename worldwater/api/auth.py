"""API authentication, rate limiting, and request tracing middleware.

Provides:
- Bearer token authentication via ``WWL_API_KEY``
- Per-key in-memory sliding-window budgets: simulation runs, other
  requests, and a points-per-window budget for flood evaluation
- ``X-Request-ID`` response header for tracing
- Request logging with hashed client IP
"""

import hashlib
import logging
import threading
import time
import uuid
from collections import defaultdict

from fastapi import Depends, HTTPException, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from worldwater.config import get_config

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# API key authentication
# ---------------------------------------------------------------------------

def require_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """Validate the Bearer token against ``WWL_API_KEY``.

    Raises 401 if the key is missing or invalid.  Skipped entirely when
    ``WWL_DEMO_MODE=true``.
    """
    cfg = get_config()

    if cfg.demo_mode:
        return "demo"

    if not cfg.api_key:
        raise HTTPException(
            status_code=500,
            detail="Server misconfiguration: WWL_API_KEY is not set.",
        )

    if credentials is None or credentials.credentials != cfg.api_key:
        logger.warning(
            "Rejected API key ip=%s path=%s",
            _hash_ip(request.client.host if request.client else None),
            request.url.path,
        )
        raise HTTPException(
            status_code=401,
            detail="Invalid or missing API key. Provide 'Authorization: Bearer <key>' header.",
        )
    return credentials.credentials


# ---------------------------------------------------------------------------
# Rate limiting (in-memory sliding window)
# ---------------------------------------------------------------------------

# key -> [(timestamp, cost), ...] within the current window
_rate_buckets: dict[str, list[tuple[float, int]]] = defaultdict(list)
_rate_lock = threading.Lock()


def _check_rate_limit(key: str, max_requests: int, window_seconds: int = 60, cost: int = 1):
    """Enforce a sliding-window budget per key.

    Each call spends ``cost`` units; raises 429 when the units spent in the
    rolling ``window_seconds`` window plus ``cost`` would exceed
    ``max_requests``. A rejected call spends nothing.
    """
    with _rate_lock:
        now = time.monotonic()
        _rate_buckets[key] = [(ts, c) for ts, c in _rate_buckets[key] if now - ts < window_seconds]
        bucket = _rate_buckets[key]

        spent = sum(c for _, c in bucket)
        if spent + cost > max_requests:
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded. Max {max_requests} per {window_seconds}s.",
            )
        bucket.append((now, cost))


def rate_limit_simulation(request: Request, api_key: str = Depends(require_api_key)):
    """Rate limit for simulation runs (``simulation_rate_limit``, 30/min by default)."""
    cfg = get_config()
    _check_rate_limit(
        f"simulation:{api_key}", max_requests=cfg.simulation_rate_limit,
        window_seconds=cfg.rate_limit_window,
    )


def rate_limit_default(request: Request, api_key: str = Depends(require_api_key)):
    """Rate limit for catalog and flood endpoints (``default_rate_limit``, 60/min by default)."""
    cfg = get_config()
    _check_rate_limit(
        f"default:{api_key}", max_requests=cfg.default_rate_limit,
        window_seconds=cfg.rate_limit_window,
    )


def charge_flood_points(api_key: str, n_points: int) -> None:
    """Spend ``n_points`` of the caller's per-window flood point budget."""
    cfg = get_config()
    _check_rate_limit(
        f"flood_points:{api_key}", max_requests=cfg.flood_points_rate_limit,
        window_seconds=cfg.rate_limit_window, cost=n_points,
    )


def reset_rate_limits() -> None:
    with _rate_lock:
        _rate_buckets.clear()


# ---------------------------------------------------------------------------
# Request-ID and logging middleware
# ---------------------------------------------------------------------------

def _hash_ip(ip: str | None) -> str:
    """Return a one-way hash of the client IP for privacy-safe logging."""
    if not ip:
        return "unknown"
    return hashlib.sha256(ip.encode()).hexdigest()[:12]


async def request_logging_middleware(request: Request, call_next):
    """Add X-Request-ID header and log every request with timing."""
    request_id = str(uuid.uuid4())
    start = time.monotonic()

    response: Response = await call_next(request)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "request_id=%s ip=%s method=%s path=%s status=%d duration_ms=%d",
        request_id,
        _hash_ip(request.client.host if request.client else None),
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
