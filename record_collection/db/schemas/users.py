from pydantic import BaseModel, Field, field_validator


class UserBase(BaseModel):
    email: str
    name: str


class UserCreate(UserBase):
    password: str = Field(min_length=8)
    type: int = 0

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str):
        cleaned = (v or "").strip().lower()
        if "@" not in cleaned:
            raise ValueError("A valid email address is required")
        return cleaned
