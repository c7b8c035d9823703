
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from fileflow.schemas.records import Record

class RegisterIn(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class UserOut(Record):
    id: str
    email: str
    name: str
    role: str

class UserListItem(UserOut):
    created_at: datetime | None = None

class TokenOut(BaseModel):
    token: str
    user: UserOut

class MeOut(BaseModel):
    user: UserOut
