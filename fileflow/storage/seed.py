import logging
from fileflow.schemas.enums import Role
from fileflow.storage.base import Storage
from fileflow.utils.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    ("superadmin@datavizpro.com", "Super Admin", Role.SUPERADMIN),
    ("admin@datavizpro.com", "Admin User", Role.ADMIN),
    ("user@datavizpro.com", "John Doe", Role.USER),
]

def seed_default_users(storage: Storage, password: str) -> int:
    """Create the default accounts when the store has no users yet."""
    if storage.list_users():
        return 0
    hashed = hash_password(password)
    with storage.transaction() as tx:
        for email, name, role in DEFAULT_USERS:
            tx.create_user(email=email, password_hash=hashed, name=name, role=role.value)
    logger.info("Seeded %d default users", len(DEFAULT_USERS))
    return len(DEFAULT_USERS)
