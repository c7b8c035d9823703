from fastapi import Request
from fastapi.responses import JSONResponse
from fileflow.auth.deps import get_token

PUBLIC_PATHS = [
    "/api/auth/login", "/api/auth/register", "/api/auth/logout",
]

async def auth_middleware(request: Request, call_next):
    path = request.url.path

    # only the API is guarded; docs and root stay open
    if not path.startswith("/api") or any(path == p for p in PUBLIC_PATHS):
        return await call_next(request)

    if request.method == "OPTIONS":
        return await call_next(request)

    if not get_token(request):
        return JSONResponse(
            status_code=401,
            content={"message": "Access token required"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await call_next(request)
