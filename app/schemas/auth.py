from pydantic import BaseModel, EmailStr, Field


class UserLogin(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserRegister(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)

class UserRead(BaseModel):
    id: int
    username: str
    email: EmailStr
    name: str

    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
