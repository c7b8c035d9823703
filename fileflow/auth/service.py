
import logging
from jose import JWTError
from fileflow.errors import Conflict, Unauthorized
from fileflow.schemas.enums import Role
from fileflow.schemas.records import UserRecord
from fileflow.storage.base import Storage
from fileflow.utils.security import hash_password, verify_password, create_access_token, decode_token

logger = logging.getLogger(__name__)

def register_user(storage: Storage, email: str, password: str, name: str,
                  role: Role | str = Role.USER) -> tuple[str, UserRecord]:
    if storage.get_user_by_email(email):
        raise Conflict("User already exists")
    user = storage.create_user(
        email=email,
        password_hash=hash_password(password),
        name=name,
        role=Role(role).value,
    )
    logger.info("Registered user %s (%s)", user.id, user.role)
    return create_access_token(user.id), user

def login_user(storage: Storage, email: str, password: str) -> tuple[str, UserRecord]:
    user = storage.get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise Unauthorized("Invalid credentials")
    return create_access_token(user.id), user

def resolve_session(storage: Storage, token: str | None) -> UserRecord:
    if not token:
        raise Unauthorized("Access token required")
    try:
        payload = decode_token(token)
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token")

    user = storage.get_user(user_id)
    if user is None:
        raise Unauthorized("Invalid token")
    return user
