"""Portfolio model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from devfolio.database import Base
from devfolio.models.mixins import TimestampMixin


class Portfolio(Base, TimestampMixin):
    """Public portfolio page, one per user, addressed by subdomain."""

    __tablename__ = "portfolios"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    title = Column(String(100), nullable=False)
    tagline = Column(String(255), nullable=False, default="")
    about = Column(Text, nullable=False, default="")
    # Nested documents; shapes are enforced by the schemas in devfolio.schemas.portfolio
    theme = Column(JSON, nullable=False, default=dict)
    layout = Column(JSON, nullable=False, default=dict)
    contact = Column(JSON, nullable=False, default=dict)
    resume = Column(JSON, nullable=True)
    seo = Column(JSON, nullable=True)
    analytics = Column(JSON, nullable=True)
    custom_domain = Column(String(255), unique=True, nullable=True)
    subdomain = Column(String(100), unique=True, nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=True)
    views = Column(Integer, nullable=False, default=0)
    last_viewed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="portfolio_page")
