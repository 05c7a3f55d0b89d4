from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserRegister(BaseModel):
    nickname: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    weight_kg: Optional[float] = Field(default=None, gt=0, le=400)


class AuthResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    role: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserMe(BaseModel):
    id: int
    email: EmailStr
    nickname: str
    role: str
    weight_kg: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
