from pydantic import BaseModel, EmailStr

# Request fields are optional so that a missing field produces the
# service's own message rather than a generic validation error.

class RegisterRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(BaseModel):
    # Plain str: an unparseable address is just an unknown user.
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: str
    email: str
    name: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserOut
