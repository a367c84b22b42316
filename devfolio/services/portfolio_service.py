"""Portfolio service: one portfolio per user, subdomains, theming and view counting."""

import logging
import re
import secrets
import string
from datetime import UTC, datetime

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from devfolio.models.portfolio import Portfolio
from devfolio.models.user import User
from devfolio.schemas.portfolio import (
    ContactInfo,
    LayoutConfig,
    PortfolioCreate,
    PortfolioUpdate,
    ThemeConfig,
)
from devfolio.services.query import Page, paginate, search_filter

logger = logging.getLogger(__name__)

SUBDOMAIN_RE = re.compile(r"^[a-z0-9-]+$")
SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 4
MAX_SUBDOMAIN_ATTEMPTS = 5


def is_valid_subdomain(candidate: str) -> bool:
    """Subdomains may only contain lowercase letters, digits and hyphens."""
    return bool(SUBDOMAIN_RE.match(candidate))


def generate_subdomain(name: str) -> str:
    """Lowercased name reduced to [a-z0-9], followed by a random base-36 suffix."""
    base = re.sub(r"[^a-z0-9]", "", name.lower())
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return base + suffix


def _document(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


class PortfolioService:
    """Service for portfolio operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_portfolios(self, search: str | None = None, page: int = 1, limit: int = 10) -> Page:
        """List public portfolios, most recently updated first."""
        query = (
            self.db.query(Portfolio)
            .options(joinedload(Portfolio.user))
            .filter(Portfolio.is_public.is_(True))
        )
        if search:
            query = query.filter(
                search_filter(search, Portfolio.title, Portfolio.tagline, Portfolio.about)
            )
        query = query.order_by(Portfolio.updated_at.desc(), Portfolio.id.desc())
        return paginate(query, page, limit)

    def _count_view(self, portfolio: Portfolio, viewer: User | None) -> Portfolio:
        """Count a view unless the owner is looking at their own page."""
        if viewer is not None and viewer.id == portfolio.user_id:
            return portfolio
        portfolio.views += 1
        portfolio.last_viewed_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(portfolio)
        return portfolio

    def view_portfolio(self, portfolio_id: int, viewer: User | None = None) -> Portfolio:
        """Get a portfolio by id; private portfolios are only visible to their owner."""
        portfolio = self.db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()
        if not portfolio or (
            not portfolio.is_public and (viewer is None or viewer.id != portfolio.user_id)
        ):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Portfolio not found")
        return self._count_view(portfolio, viewer)

    def view_by_subdomain(self, subdomain: str, viewer: User | None = None) -> Portfolio:
        """Get a public portfolio by subdomain."""
        portfolio = (
            self.db.query(Portfolio)
            .filter(Portfolio.subdomain == subdomain.lower(), Portfolio.is_public.is_(True))
            .first()
        )
        if not portfolio:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Portfolio not found")
        return self._count_view(portfolio, viewer)

    def get_user_portfolio(self, user_id: int) -> Portfolio | None:
        return self.db.query(Portfolio).filter(Portfolio.user_id == user_id).first()

    def get_owned_portfolio(self, user_id: int) -> Portfolio:
        portfolio = self.get_user_portfolio(user_id)
        if not portfolio:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Portfolio not found")
        return portfolio

    def subdomain_taken(self, subdomain: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(Portfolio.id).filter(Portfolio.subdomain == subdomain)
        if exclude_id is not None:
            query = query.filter(Portfolio.id != exclude_id)
        return query.first() is not None

    def check_subdomain(self, subdomain: str) -> bool:
        """Return whether a subdomain is free; rejects malformed candidates."""
        if not is_valid_subdomain(subdomain):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Subdomain can only contain lowercase letters, numbers, and hyphens",
            )
        return not self.subdomain_taken(subdomain)

    def _unique_subdomain(self, name: str) -> str:
        for _ in range(MAX_SUBDOMAIN_ATTEMPTS):
            candidate = generate_subdomain(name)
            if not self.subdomain_taken(candidate):
                return candidate
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate a subdomain",
        )

    def _claim_subdomain(self, subdomain: str, exclude_id: int | None = None) -> None:
        if self.subdomain_taken(subdomain, exclude_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Subdomain is already taken"
            )

    def get_or_create_for_user(self, user: User) -> Portfolio:
        """Return the user's portfolio, creating a default one on first access."""
        portfolio = self.get_user_portfolio(user.id)
        if portfolio:
            return portfolio

        portfolio = Portfolio(
            user_id=user.id,
            title=f"{user.name}'s Portfolio",
            subdomain=self._unique_subdomain(user.name),
            theme=_document(ThemeConfig()),
            layout=_document(LayoutConfig()),
            contact=_document(ContactInfo(email=user.email)),
        )
        self.db.add(portfolio)
        self.db.commit()
        self.db.refresh(portfolio)
        logger.info(f"Created default portfolio {portfolio.id} for user {user.id}")
        return portfolio

    def create_portfolio(self, data: PortfolioCreate, user: User) -> Portfolio:
        """Create the user's portfolio; a user may own only one."""
        if self.get_user_portfolio(user.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Portfolio already exists. Use update instead.",
            )

        if data.subdomain:
            self._claim_subdomain(data.subdomain)
            subdomain = data.subdomain
        else:
            subdomain = self._unique_subdomain(user.name)

        values = data.model_dump(mode="json", by_alias=True, exclude={"subdomain"})
        portfolio = Portfolio(
            user_id=user.id,
            subdomain=subdomain,
            title=values["title"],
            tagline=values["tagline"],
            about=values["about"],
            theme=values["theme"],
            layout=values["layout"],
            contact=values["contact"],
            resume=values["resume"],
            seo=values["seo"],
            analytics=values["analytics"],
            custom_domain=values["customDomain"],
            is_public=values["isPublic"],
        )
        self.db.add(portfolio)
        self.db.commit()
        self.db.refresh(portfolio)
        logger.info(f"Created portfolio {portfolio.id} for user {user.id}")
        return portfolio

    def update_portfolio(self, data: PortfolioUpdate, user_id: int) -> Portfolio:
        """Apply provided fields to the user's portfolio."""
        portfolio = self.get_owned_portfolio(user_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        if "subdomain" in updates:
            self._claim_subdomain(updates["subdomain"], exclude_id=portfolio.id)
        for field in updates:
            value = getattr(data, field)
            if hasattr(value, "model_dump"):
                value = _document(value)
            setattr(portfolio, field, value)

        self.db.commit()
        self.db.refresh(portfolio)
        return portfolio

    def update_theme(self, theme: ThemeConfig, user_id: int) -> Portfolio:
        portfolio = self.get_owned_portfolio(user_id)
        portfolio.theme = _document(theme)
        self.db.commit()
        self.db.refresh(portfolio)
        return portfolio

    def update_layout(self, layout: LayoutConfig, user_id: int) -> Portfolio:
        portfolio = self.get_owned_portfolio(user_id)
        portfolio.layout = _document(layout)
        self.db.commit()
        self.db.refresh(portfolio)
        return portfolio

    def delete_portfolio(self, user_id: int) -> None:
        portfolio = self.get_owned_portfolio(user_id)
        self.db.delete(portfolio)
        self.db.commit()
