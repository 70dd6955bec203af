"""Domain Entities - Guests"""
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID, uuid4


class User(BaseModel):
    """Guest Entity"""
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID = Field(default_factory=uuid4)
    username: str
    disabled: bool = False


class UserInDB(User):
    """Guest with hashed password for storage"""
    hashed_password: str
