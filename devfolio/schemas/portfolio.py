"""Portfolio schemas: theme, layout and contact documents plus the portfolio itself."""

from datetime import datetime

from pydantic import Field

from devfolio.models.enums import PortfolioSection
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief

SUBDOMAIN_PATTERN = r"^[a-z0-9-]+$"

DEFAULT_SECTIONS_ORDER = [
    PortfolioSection.HERO,
    PortfolioSection.ABOUT,
    PortfolioSection.SKILLS,
    PortfolioSection.PROJECTS,
    PortfolioSection.CONTACT,
]

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class ThemeConfig(CamelModel):
    """Colors and font of a portfolio page."""

    primary_color: str = Field("#6366f1", pattern=HEX_COLOR)
    secondary_color: str = Field("#f59e0b", pattern=HEX_COLOR)
    background_color: str = Field("#ffffff", pattern=HEX_COLOR)
    text_color: str = Field("#1f2937", pattern=HEX_COLOR)
    font_family: str = Field("Inter", max_length=100)


class LayoutConfig(CamelModel):
    """Section visibility and ordering of a portfolio page."""

    show_hero: bool = True
    show_about: bool = True
    show_skills: bool = True
    show_projects: bool = True
    show_contact: bool = True
    sections_order: list[PortfolioSection] = Field(
        default_factory=lambda: list(DEFAULT_SECTIONS_ORDER)
    )


class ContactInfo(CamelModel):
    """Contact block shown on a portfolio page."""

    email: str | None = None
    phone: str | None = None
    location: str | None = None
    website: str | None = None
    linkedin: str | None = None
    github: str | None = None
    twitter: str | None = None
    instagram: str | None = None


class ResumeInfo(CamelModel):
    """Uploaded resume reference."""

    url: str | None = None
    filename: str | None = None
    uploaded_at: datetime | None = None


class SeoInfo(CamelModel):
    """Search engine metadata."""

    title: str | None = None
    description: str | None = None
    keywords: list[str] = []
    og_image: str | None = None


class AnalyticsInfo(CamelModel):
    """Third-party analytics identifiers; never exposed in public listings."""

    google_analytics_id: str | None = None
    facebook_pixel_id: str | None = None


class PortfolioCreate(CamelModel):
    """Create the caller's portfolio."""

    title: str = Field(..., min_length=3, max_length=100)
    tagline: str = Field("", max_length=255)
    about: str = Field("", max_length=5000)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    resume: ResumeInfo | None = None
    seo: SeoInfo | None = None
    analytics: AnalyticsInfo | None = None
    custom_domain: str | None = Field(None, max_length=255)
    subdomain: str | None = Field(None, min_length=3, max_length=30, pattern=SUBDOMAIN_PATTERN)
    is_public: bool = True


class PortfolioUpdate(CamelModel):
    """Update the caller's portfolio; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=3, max_length=100)
    tagline: str | None = Field(None, max_length=255)
    about: str | None = Field(None, max_length=5000)
    theme: ThemeConfig | None = None
    layout: LayoutConfig | None = None
    contact: ContactInfo | None = None
    resume: ResumeInfo | None = None
    seo: SeoInfo | None = None
    analytics: AnalyticsInfo | None = None
    custom_domain: str | None = Field(None, max_length=255)
    subdomain: str | None = Field(None, min_length=3, max_length=30, pattern=SUBDOMAIN_PATTERN)
    is_public: bool | None = None


class ThemeUpdate(CamelModel):
    """Body of `PUT /portfolios/theme`."""

    theme: ThemeConfig


class LayoutUpdate(CamelModel):
    """Body of `PUT /portfolios/layout`."""

    layout: LayoutConfig


class SubdomainAvailability(CamelModel):
    """Result of a subdomain availability check."""

    success: bool = True
    available: bool
    message: str


class PortfolioPublic(ORMModel):
    """Portfolio as shown in public listings."""

    id: int
    user_id: int
    user: UserBrief | None = None
    title: str
    tagline: str
    about: str
    theme: ThemeConfig
    layout: LayoutConfig
    contact: ContactInfo
    resume: ResumeInfo | None
    seo: SeoInfo | None
    custom_domain: str | None
    subdomain: str
    is_public: bool
    views: int
    last_viewed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class PortfolioResponse(PortfolioPublic):
    """Full portfolio, including analytics identifiers."""

    analytics: AnalyticsInfo | None
