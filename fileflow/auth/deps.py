
from fastapi import Request, Depends
from fileflow.auth.roles import authorize
from fileflow.auth.service import resolve_session
from fileflow.schemas.enums import Role
from fileflow.schemas.records import UserRecord
from fileflow.storage.base import Storage

COOKIE_NAME = "ffp_jwt"

def get_storage(request: Request) -> Storage:
    return request.app.state.storage

def get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return request.cookies.get(COOKIE_NAME)

def get_current_user(request: Request, storage: Storage = Depends(get_storage)) -> UserRecord:
    return resolve_session(storage, get_token(request))

def require_roles(*roles: Role | str):
    def _dependency(user: UserRecord = Depends(get_current_user)) -> UserRecord:
        authorize(user, roles)
        return user
    return _dependency
