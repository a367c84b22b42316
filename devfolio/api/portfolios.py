"""Portfolio API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from devfolio.api.dependencies import (
    CurrentUser,
    LimitParam,
    OptionalUser,
    PageParam,
    get_portfolio_service,
    page_response,
)
from devfolio.schemas.common import DataResponse, MessageResponse, PaginatedResponse
from devfolio.schemas.portfolio import (
    LayoutUpdate,
    PortfolioCreate,
    PortfolioPublic,
    PortfolioResponse,
    PortfolioUpdate,
    SubdomainAvailability,
    ThemeUpdate,
)
from devfolio.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/api/portfolios", tags=["portfolios"])

Service = Annotated[PortfolioService, Depends(get_portfolio_service)]


@router.get("", response_model=PaginatedResponse[PortfolioPublic])
async def list_portfolios(
    service: Service,
    search: str | None = None,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List public portfolios, most recently updated first."""
    return page_response(service.list_portfolios(search=search, page=page, limit=limit), PortfolioPublic)


# --- Caller's own portfolio ---


@router.get("/my", response_model=DataResponse[PortfolioResponse])
async def get_my_portfolio(current_user: CurrentUser, service: Service):
    """Get the caller's portfolio, creating a default one on first access."""
    portfolio = service.get_or_create_for_user(current_user)
    return DataResponse(data=PortfolioResponse.model_validate(portfolio))


@router.post("", response_model=DataResponse[PortfolioResponse], status_code=status.HTTP_201_CREATED)
async def create_portfolio(data: PortfolioCreate, current_user: CurrentUser, service: Service):
    """Create the caller's portfolio."""
    portfolio = service.create_portfolio(data, current_user)
    return DataResponse(
        message="Portfolio created successfully", data=PortfolioResponse.model_validate(portfolio)
    )


@router.put("", response_model=DataResponse[PortfolioResponse])
async def update_portfolio(data: PortfolioUpdate, current_user: CurrentUser, service: Service):
    """Update the caller's portfolio."""
    portfolio = service.update_portfolio(data, current_user.id)
    return DataResponse(
        message="Portfolio updated successfully", data=PortfolioResponse.model_validate(portfolio)
    )


@router.delete("", response_model=MessageResponse)
async def delete_portfolio(current_user: CurrentUser, service: Service):
    """Delete the caller's portfolio."""
    service.delete_portfolio(current_user.id)
    return MessageResponse(message="Portfolio deleted successfully")


@router.get("/check-subdomain/{subdomain}", response_model=SubdomainAvailability)
async def check_subdomain(subdomain: str, service: Service):
    """Check whether a subdomain is free."""
    available = service.check_subdomain(subdomain)
    return SubdomainAvailability(
        available=available,
        message="Subdomain is available" if available else "Subdomain is already taken",
    )


@router.put("/theme", response_model=DataResponse[PortfolioResponse])
async def update_theme(body: ThemeUpdate, current_user: CurrentUser, service: Service):
    """Replace the caller's portfolio theme."""
    portfolio = service.update_theme(body.theme, current_user.id)
    return DataResponse(
        message="Portfolio theme updated successfully",
        data=PortfolioResponse.model_validate(portfolio),
    )


@router.put("/layout", response_model=DataResponse[PortfolioResponse])
async def update_layout(body: LayoutUpdate, current_user: CurrentUser, service: Service):
    """Replace the caller's portfolio layout."""
    portfolio = service.update_layout(body.layout, current_user.id)
    return DataResponse(
        message="Portfolio layout updated successfully",
        data=PortfolioResponse.model_validate(portfolio),
    )


# --- Public pages ---


@router.get("/subdomain/{subdomain}", response_model=DataResponse[PortfolioPublic])
async def get_portfolio_by_subdomain(subdomain: str, service: Service, current_user: OptionalUser):
    """Get a public portfolio by subdomain."""
    portfolio = service.view_by_subdomain(subdomain, current_user)
    return DataResponse(data=PortfolioPublic.model_validate(portfolio))


@router.get("/{portfolio_id}", response_model=DataResponse[PortfolioPublic])
async def get_portfolio(portfolio_id: int, service: Service, current_user: OptionalUser):
    """Get a portfolio by id; private portfolios are visible only to their owner."""
    portfolio = service.view_portfolio(portfolio_id, current_user)
    return DataResponse(data=PortfolioPublic.model_validate(portfolio))
