
from fastapi import APIRouter, Depends, Response
from fileflow.auth.deps import get_storage, get_current_user, COOKIE_NAME
from fileflow.auth.service import register_user, login_user
from fileflow.config import settings
from fileflow.schemas.auth import RegisterIn, LoginIn, TokenOut, MeOut, UserOut
from fileflow.storage.base import Storage

router = APIRouter(prefix="/api/auth", tags=["auth"])

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="Lax",
        secure=settings.app_env != "dev",
        path="/",
        max_age=settings.access_token_expire_minutes * 60,
    )

def _token_out(token, user) -> TokenOut:
    return TokenOut(token=token, user=UserOut.model_validate(user.model_dump()))

@router.post("/register", response_model=TokenOut)
def register(body: RegisterIn, response: Response, storage: Storage = Depends(get_storage)):
    token, user = register_user(storage, body.email, body.password, body.name)
    set_auth_cookie(response, token)
    return _token_out(token, user)

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, response: Response, storage: Storage = Depends(get_storage)):
    token, user = login_user(storage, body.email, body.password)
    set_auth_cookie(response, token)
    return _token_out(token, user)

@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"ok": True}

@router.get("/me", response_model=MeOut)
def me(user=Depends(get_current_user)):
    return MeOut(user=UserOut.model_validate(user.model_dump()))
