"""User models."""

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Body of ``POST /users``."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None


class User(BaseModel):
    """A stored user."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str | None = None
    email: str | None = None


class UserCreated(BaseModel):
    """Response of ``POST /users``."""

    id: str
