from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .core.db import Base


def default_theme() -> dict:
    return {"primaryColor": "#8B5CF6", "secondaryColor": "#F3F4F6"}


class Organization(Base):
    """A tenant. Hosts resolve to it through default_domain or custom_domain."""

    __tablename__ = "organization"

    # Stored as the canonical UUID string
    id: Mapped[str] = mapped_column("id", String(50), primary_key=True)
    name: Mapped[str] = mapped_column("name", String(200), nullable=False)
    contact_person: Mapped[str | None] = mapped_column("contactperson", String(100), nullable=True)
    contact_no: Mapped[str | None] = mapped_column("contactno", String(20), nullable=True)
    address: Mapped[str | None] = mapped_column("address", Text, nullable=True)
    about: Mapped[str | None] = mapped_column("about", Text, nullable=True)
    default_domain: Mapped[str] = mapped_column("defaultdomain", String(255), nullable=False)
    custom_domain: Mapped[str | None] = mapped_column("customdomain", String(255), nullable=True)
    logo: Mapped[str | None] = mapped_column("logo", String(500), nullable=True)
    theme: Mapped[dict] = mapped_column("theme", JSON, default=default_theme, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdat", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedat",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
