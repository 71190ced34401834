"""User model."""
from docchat.models.base import CamelModel


class UserCreate(CamelModel):
    username: str
    password: str


class User(UserCreate):
    """Registered user. Not used by any chat flow."""

    id: int
