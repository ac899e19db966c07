"""Pydantic DTOs for back-office authentication and the dashboard."""

from pydantic import BaseModel, Field

from newsroom.application.schemas.article import ArticleSummaryResponse
from newsroom.domain.entities import AdminRole


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, examples=["editor@example.com"])
    password: str = Field(..., min_length=1)


class AdminResponse(BaseModel):
    id: int
    username: str
    email: str
    role: AdminRole

    model_config = {"from_attributes": True}


class DashboardStats(BaseModel):
    published: int
    draft: int
    scheduled: int
    views: int
    categories: int
    tags: int

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent: list[ArticleSummaryResponse]

    model_config = {"from_attributes": True}
