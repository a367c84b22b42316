"""Skill service."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from devfolio.models.project import Project
from devfolio.models.skill import Skill
from devfolio.schemas.project import ProjectBrief
from devfolio.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from devfolio.services.query import Page, paginate


class SkillService:
    """Service for skill operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_skills(
        self,
        category: str | None = None,
        level: str | None = None,
        user_id: int | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        """List skills, strongest first."""
        query = self.db.query(Skill).options(joinedload(Skill.user))
        if category:
            query = query.filter(Skill.category == category)
        if level:
            query = query.filter(Skill.level == level)
        if user_id is not None:
            query = query.filter(Skill.user_id == user_id)
        query = query.order_by(Skill.percentage.desc(), Skill.id.asc())
        return paginate(query, page, limit)

    def list_user_skills(self, user_id: int) -> list[Skill]:
        return (
            self.db.query(Skill)
            .filter(Skill.user_id == user_id)
            .order_by(Skill.percentage.desc(), Skill.id.asc())
            .all()
        )

    def get_owned_skill(self, skill_id: int, user_id: int) -> Skill:
        skill = self.db.query(Skill).filter(Skill.id == skill_id, Skill.user_id == user_id).first()
        if not skill:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Skill not found or unauthorized",
            )
        return skill

    def _check_linked_projects(self, project_ids: list[int], user_id: int) -> list[int]:
        """Linked projects must exist and belong to the skill owner."""
        unique_ids = list(dict.fromkeys(project_ids))
        if not unique_ids:
            return []
        owned = {
            pid
            for (pid,) in self.db.query(Project.id).filter(
                Project.id.in_(unique_ids), Project.user_id == user_id
            )
        }
        missing = [pid for pid in unique_ids if pid not in owned]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown project ids: {', '.join(map(str, missing))}",
            )
        return unique_ids

    def create_skill(self, data: SkillCreate, user_id: int) -> Skill:
        values = data.model_dump(mode="json", by_alias=False)
        values["certifications"] = [
            c.model_dump(mode="json", by_alias=True) for c in data.certifications
        ]
        values["project_ids"] = self._check_linked_projects(data.project_ids, user_id)
        skill = Skill(user_id=user_id, **values)
        self.db.add(skill)
        self.db.commit()
        self.db.refresh(skill)
        return skill

    def update_skill(self, skill_id: int, data: SkillUpdate, user_id: int) -> Skill:
        skill = self.get_owned_skill(skill_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if data.certifications is not None:
            updates["certifications"] = [
                c.model_dump(mode="json", by_alias=True) for c in data.certifications
            ]
        if data.project_ids is not None:
            updates["project_ids"] = self._check_linked_projects(data.project_ids, user_id)
        for field, value in updates.items():
            setattr(skill, field, value)
        self.db.commit()
        self.db.refresh(skill)
        return skill

    def delete_skill(self, skill_id: int, user_id: int) -> None:
        skill = self.get_owned_skill(skill_id, user_id)
        self.db.delete(skill)
        self.db.commit()

    def categories(self) -> list[str]:
        """Distinct categories across all skills."""
        return sorted(c for (c,) in self.db.query(Skill.category).distinct())

    def to_response(self, skills: list[Skill]) -> list[SkillResponse]:
        """Build responses with linked projects resolved in one query."""
        wanted = {pid for skill in skills for pid in (skill.project_ids or [])}
        projects = {}
        if wanted:
            projects = {
                p.id: ProjectBrief.model_validate(p)
                for p in self.db.query(Project).filter(Project.id.in_(wanted))
            }
        responses = []
        for skill in skills:
            response = SkillResponse.model_validate(skill)
            response.projects = [
                projects[pid] for pid in (skill.project_ids or []) if pid in projects
            ]
            responses.append(response)
        return responses
