"""Typed wrappers around ApiClient, one per API resource."""

import re
from typing import Any

from devfolio.client.api import ApiClient, ApiError

PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _require(value: Any, message: str) -> None:
    if not value:
        raise ApiError(message)


class _Resource:
    def __init__(self, client: ApiClient) -> None:
        self.client = client


class AuthAPI(_Resource):
    async def signup(self, name: str, email: str, password: str, confirm_password: str) -> dict:
        """Register and keep the issued token on the client."""
        if not (name and email and password):
            raise ApiError("Please fill in all required fields")
        if password != confirm_password:
            raise ApiError("Passwords do not match")
        if len(password) < 6:
            raise ApiError("Password must be at least 6 characters long")
        result = await self.client.post(
            "/auth/signup",
            json={
                "name": name,
                "email": email,
                "password": password,
                "confirmPassword": confirm_password,
            },
        )
        self.client.token = result["token"]
        return result

    async def login(self, email: str, password: str) -> dict:
        """Log in and keep the issued token on the client."""
        if not (email and password):
            raise ApiError("Please enter both email and password")
        result = await self.client.post("/auth/login", json={"email": email, "password": password})
        self.client.token = result["token"]
        return result

    def logout(self) -> None:
        self.client.token = None

    async def me(self) -> dict:
        return await self.client.get("/auth/me")


class StudentAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/students", params=params, use_cache=True)

    async def search(self, search: str, **filters: Any) -> dict:
        return await self.client.get("/students/search", params={"search": search, **filters})

    async def get(self, student_id: int) -> dict:
        _require(student_id, "Student ID is required")
        return await self.client.get(f"/students/{student_id}", use_cache=True)

    async def my_profile(self) -> dict:
        return await self.client.get("/students/profile/me")

    async def update_profile(self, data: dict) -> dict:
        if data.get("email") and not EMAIL_RE.match(data["email"]):
            raise ApiError("Please enter a valid email address")
        if data.get("phone") and not PHONE_RE.match(data["phone"].replace(" ", "")):
            raise ApiError("Please enter a valid phone number")
        return await self.client.put("/students/profile/me", json=data)

    async def delete(self, student_id: int) -> dict:
        _require(student_id, "Student ID is required")
        return await self.client.delete(f"/students/{student_id}")


class ProjectAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/projects", params=params, use_cache=True)

    async def mine(self) -> dict:
        return await self.client.get("/projects/my")

    async def get(self, project_id: int) -> dict:
        _require(project_id, "Project ID is required")
        return await self.client.get(f"/projects/{project_id}")

    async def create(self, data: dict) -> dict:
        if not (data.get("title") and data.get("description")):
            raise ApiError("Title and description are required")
        return await self.client.post("/projects", json=data)

    async def update(self, project_id: int, data: dict) -> dict:
        _require(project_id, "Project ID is required")
        return await self.client.put(f"/projects/{project_id}", json=data)

    async def delete(self, project_id: int) -> dict:
        _require(project_id, "Project ID is required")
        return await self.client.delete(f"/projects/{project_id}")

    async def like(self, project_id: int) -> dict:
        _require(project_id, "Project ID is required")
        return await self.client.post(f"/projects/{project_id}/like")


class SkillAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/skills", params=params, use_cache=True)

    async def mine(self) -> dict:
        return await self.client.get("/skills/my")

    async def categories(self) -> dict:
        return await self.client.get("/skills/categories", use_cache=True)

    async def create(self, data: dict) -> dict:
        if not (data.get("name") and data.get("category") and data.get("level")):
            raise ApiError("Name, category, and level are required")
        if not 0 <= data.get("percentage", 0) <= 100:
            raise ApiError("Percentage must be between 0 and 100")
        return await self.client.post("/skills", json=data)

    async def update(self, skill_id: int, data: dict) -> dict:
        _require(skill_id, "Skill ID is required")
        if "percentage" in data and not 0 <= data["percentage"] <= 100:
            raise ApiError("Percentage must be between 0 and 100")
        return await self.client.put(f"/skills/{skill_id}", json=data)

    async def delete(self, skill_id: int) -> dict:
        _require(skill_id, "Skill ID is required")
        return await self.client.delete(f"/skills/{skill_id}")


class CourseAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/courses", params=params, use_cache=True)

    async def mine(self, list_type: str = "enrolled") -> dict:
        return await self.client.get("/courses/my", params={"type": list_type})

    async def get(self, course_id: int) -> dict:
        _require(course_id, "Course ID is required")
        return await self.client.get(f"/courses/{course_id}", use_cache=True)

    async def create(self, data: dict) -> dict:
        if not (data.get("title") and data.get("description") and data.get("category")):
            raise ApiError("Title, description, and category are required")
        return await self.client.post("/courses", json=data)

    async def update(self, course_id: int, data: dict) -> dict:
        _require(course_id, "Course ID is required")
        return await self.client.put(f"/courses/{course_id}", json=data)

    async def delete(self, course_id: int) -> dict:
        _require(course_id, "Course ID is required")
        return await self.client.delete(f"/courses/{course_id}")

    async def enroll(self, course_id: int) -> dict:
        _require(course_id, "Course ID is required")
        return await self.client.post(f"/courses/{course_id}/enroll")

    async def complete(self, course_id: int) -> dict:
        _require(course_id, "Course ID is required")
        return await self.client.post(f"/courses/{course_id}/complete")

    async def review(self, course_id: int, rating: int, comment: str) -> dict:
        _require(course_id, "Course ID is required")
        if not (rating and comment):
            raise ApiError("Rating and comment are required")
        return await self.client.post(
            f"/courses/{course_id}/review", json={"rating": rating, "comment": comment}
        )


class BlogAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/blogs", params=params, use_cache=True)

    async def mine(self) -> dict:
        return await self.client.get("/blogs/my")

    async def get(self, blog_id: int) -> dict:
        _require(blog_id, "Blog ID is required")
        return await self.client.get(f"/blogs/{blog_id}")

    async def get_by_slug(self, slug: str) -> dict:
        _require(slug, "Blog slug is required")
        return await self.client.get(f"/blogs/slug/{slug}")

    async def categories(self) -> dict:
        return await self.client.get("/blogs/categories", use_cache=True)

    async def tags(self) -> dict:
        return await self.client.get("/blogs/tags", use_cache=True)

    async def create(self, data: dict) -> dict:
        if not (data.get("title") and data.get("content") and data.get("excerpt")):
            raise ApiError("Title, content, and excerpt are required")
        return await self.client.post("/blogs", json=data)

    async def update(self, blog_id: int, data: dict) -> dict:
        _require(blog_id, "Blog ID is required")
        return await self.client.put(f"/blogs/{blog_id}", json=data)

    async def delete(self, blog_id: int) -> dict:
        _require(blog_id, "Blog ID is required")
        return await self.client.delete(f"/blogs/{blog_id}")

    async def like(self, blog_id: int) -> dict:
        _require(blog_id, "Blog ID is required")
        return await self.client.post(f"/blogs/{blog_id}/like")

    async def comment(self, blog_id: int, content: str) -> dict:
        _require(blog_id, "Blog ID is required")
        _require(content, "Comment content is required")
        return await self.client.post(f"/blogs/{blog_id}/comments", json={"content": content})

    async def reply(self, blog_id: int, comment_id: int, content: str) -> dict:
        if not (blog_id and comment_id):
            raise ApiError("Blog ID and Comment ID are required")
        _require(content, "Reply content is required")
        return await self.client.post(
            f"/blogs/{blog_id}/comments/{comment_id}/replies", json={"content": content}
        )


class PortfolioAPI(_Resource):
    async def list(self, **params: Any) -> dict:
        return await self.client.get("/portfolios", params=params, use_cache=True)

    async def mine(self) -> dict:
        return await self.client.get("/portfolios/my")

    async def get(self, portfolio_id: int) -> dict:
        _require(portfolio_id, "Portfolio ID is required")
        return await self.client.get(f"/portfolios/{portfolio_id}")

    async def get_by_subdomain(self, subdomain: str) -> dict:
        _require(subdomain, "Subdomain is required")
        return await self.client.get(f"/portfolios/subdomain/{subdomain}")

    async def check_subdomain(self, subdomain: str) -> dict:
        _require(subdomain, "Subdomain is required")
        return await self.client.get(f"/portfolios/check-subdomain/{subdomain}")

    async def create(self, data: dict) -> dict:
        _require(data.get("title"), "Portfolio title is required")
        return await self.client.post("/portfolios", json=data)

    async def update(self, data: dict) -> dict:
        return await self.client.put("/portfolios", json=data)

    async def delete(self) -> dict:
        return await self.client.delete("/portfolios")

    async def update_theme(self, theme: dict) -> dict:
        return await self.client.put("/portfolios/theme", json={"theme": theme})

    async def update_layout(self, layout: dict) -> dict:
        return await self.client.put("/portfolios/layout", json={"layout": layout})


class NotificationAPI(_Resource):
    async def list(self, page: int = 1, limit: int = 20) -> dict:
        return await self.client.get("/notifications", params={"page": page, "limit": limit})

    async def mark_read(self, notification_id: int) -> dict:
        _require(notification_id, "Notification ID is required")
        return await self.client.put(f"/notifications/{notification_id}/read")

    async def mark_all_read(self) -> dict:
        return await self.client.put("/notifications/read-all")


class Devfolio:
    """All resource wrappers over a single ApiClient."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.auth = AuthAPI(client)
        self.students = StudentAPI(client)
        self.projects = ProjectAPI(client)
        self.skills = SkillAPI(client)
        self.courses = CourseAPI(client)
        self.blogs = BlogAPI(client)
        self.portfolios = PortfolioAPI(client)
        self.notifications = NotificationAPI(client)
