from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserIdentity(BaseModel):
    """Who is logged in; persisted next to the session token"""

    id: str
    username: str


class AuthResponse(BaseModel):
    token: str = Field(..., min_length=1)
    user: UserIdentity
