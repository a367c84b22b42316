"""Blog API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from devfolio.api.dependencies import (
    CurrentUser,
    LimitParam,
    OptionalUser,
    PageParam,
    get_blog_service,
    get_notification_service,
    page_response,
)
from devfolio.models.enums import BlogCategory
from devfolio.schemas.blog import (
    BlogCreate,
    BlogResponse,
    BlogSummary,
    BlogUpdate,
    CommentCreate,
    CommentResponse,
    ReplyResponse,
)
from devfolio.schemas.common import (
    DataResponse,
    LikeResult,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
)
from devfolio.services.blog_service import BlogService
from devfolio.services.notification_service import NotificationService
from devfolio.services.query import split_csv

router = APIRouter(prefix="/api/blogs", tags=["blogs"])

Service = Annotated[BlogService, Depends(get_blog_service)]
Notifications = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=PaginatedResponse[BlogSummary])
async def list_blogs(
    service: Service,
    current_user: OptionalUser,
    category: BlogCategory | None = None,
    tags: str | None = None,
    search: str | None = None,
    featured: bool | None = None,
    published: bool = True,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List posts without their content. `tags` is a comma-separated list."""
    result = service.list_blogs(
        category=category.value if category else None,
        tags=split_csv(tags),
        search=search,
        featured=featured,
        published=published,
        user=current_user,
        page=page,
        limit=limit,
    )
    return page_response(result, BlogSummary)


# --- Static routes first (before /{blog_id}) ---


@router.get("/categories", response_model=DataResponse[list[str]])
async def list_blog_categories(service: Service):
    """Distinct categories across all posts."""
    return DataResponse(data=service.categories())


@router.get("/tags", response_model=DataResponse[list[str]])
async def list_blog_tags(service: Service):
    """Distinct tags across all posts."""
    return DataResponse(data=service.tags())


@router.get("/my", response_model=ListResponse[BlogSummary])
async def list_my_blogs(current_user: CurrentUser, service: Service):
    """List the caller's posts, drafts included."""
    blogs = service.list_user_blogs(current_user.id)
    return ListResponse(count=len(blogs), data=[BlogSummary.model_validate(b) for b in blogs])


@router.get("/slug/{slug}", response_model=DataResponse[BlogResponse])
async def get_blog_by_slug(slug: str, service: Service):
    """Get a published post by slug and count the view."""
    return DataResponse(data=BlogResponse.model_validate(service.view_blog_by_slug(slug)))


@router.get("/{blog_id}", response_model=DataResponse[BlogResponse])
async def get_blog(blog_id: int, service: Service, current_user: OptionalUser):
    """Get a post by id and count the view."""
    return DataResponse(data=BlogResponse.model_validate(service.view_blog(blog_id, current_user)))


@router.post("", response_model=DataResponse[BlogResponse], status_code=status.HTTP_201_CREATED)
async def create_blog(data: BlogCreate, current_user: CurrentUser, service: Service):
    """Create a post authored by the caller."""
    blog = service.create_blog(data, current_user.id)
    return DataResponse(message="Blog post created successfully", data=BlogResponse.model_validate(blog))


@router.put("/{blog_id}", response_model=DataResponse[BlogResponse])
async def update_blog(blog_id: int, data: BlogUpdate, current_user: CurrentUser, service: Service):
    """Update one of the caller's posts."""
    blog = service.update_blog(blog_id, data, current_user.id)
    return DataResponse(message="Blog post updated successfully", data=BlogResponse.model_validate(blog))


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(blog_id: int, current_user: CurrentUser, service: Service):
    """Delete one of the caller's posts."""
    service.delete_blog(blog_id, current_user.id)
    return MessageResponse(message="Blog post deleted successfully")


@router.post("/{blog_id}/like", response_model=DataResponse[LikeResult])
async def like_blog(
    blog_id: int,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Toggle the caller's like on a post."""
    likes, is_liked, intent = service.toggle_like(blog_id, current_user)
    notifications.notify(intent)
    return DataResponse(
        message="Blog liked" if is_liked else "Blog unliked",
        data=LikeResult(likes=likes, is_liked=is_liked),
    )


@router.post("/{blog_id}/comments", response_model=DataResponse[CommentResponse])
async def add_comment(
    blog_id: int,
    body: CommentCreate,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Comment on a post."""
    comment, intent = service.add_comment(blog_id, body.content, current_user)
    notifications.notify(intent)
    return DataResponse(message="Comment added successfully", data=CommentResponse.model_validate(comment))


@router.post("/{blog_id}/comments/{comment_id}/replies", response_model=DataResponse[ReplyResponse])
async def add_reply(
    blog_id: int,
    comment_id: int,
    body: CommentCreate,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Reply to a comment on a post."""
    reply, intent = service.add_reply(blog_id, comment_id, body.content, current_user)
    notifications.notify(intent)
    return DataResponse(message="Reply added successfully", data=ReplyResponse.model_validate(reply))
