"""
Project endpoints.

Minimal project records that own boards.
"""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taskboard.core.dependencies import get_project_service
from taskboard.schemas.project import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
)
from taskboard.services.project_service import ProjectService

router = APIRouter()


@router.get(
    "/projects",
    response_model=ProjectListResponse,
    summary="List the projects of an owner",
)
async def list_projects(
    user_id: UUID = Query(..., description="Owner of the projects"),
    service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    return await service.list_projects(user_id)


@router.post(
    "/projects",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
)
async def create_project(
    data: ProjectCreateRequest,
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return await service.create_project(data)


@router.get(
    "/projects/{project_id}",
    response_model=ProjectResponse,
    summary="Get project detail",
)
async def get_project(
    project_id: UUID,
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return await service.get_project(project_id)
