"""AuthToken model - session token to user lookup (tokens are issued elsewhere)."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from files_manager.models.base import Base, TimestampMixin, UserMixin


class AuthToken(Base, TimestampMixin, UserMixin):
    __tablename__ = "auth_tokens"

    token: Mapped[str] = mapped_column(String(255), primary_key=True)
