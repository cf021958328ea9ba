"""Request guards for the export API.

The API is meant to listen on localhost behind the administrator's own
frontend. State-changing requests must carry ``X-Requested-With`` so a
browser cannot be tricked into issuing them cross-site.
"""

from fastapi import HTTPException, Request


async def require_csrf_header(request: Request) -> None:
    """Dependency: reject mutating requests without the CSRF header."""
    if request.method in ("POST", "PUT", "DELETE", "PATCH"):
        if request.headers.get("X-Requested-With") != "XMLHttpRequest":
            raise HTTPException(status_code=403, detail="Missing CSRF header")
