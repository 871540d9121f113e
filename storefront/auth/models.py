from pydantic import BaseModel, EmailStr, Field


class RegisterUserRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)


class AuthenticatedUser(BaseModel):
    """The user reference kept in the session once login succeeds"""
    id: int
    username: str
    email: str
