"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.comments import router as comments_router
from api.v1.routes.events import router as events_router
from api.v1.routes.notifications import router as notifications_router
from api.v1.routes.projects import router as projects_router
from api.v1.routes.projects import workspace_projects_router
from api.v1.routes.sections import project_sections_router
from api.v1.routes.sections import router as sections_router
from api.v1.routes.tasks import project_tasks_router
from api.v1.routes.tasks import router as tasks_router
from api.v1.routes.teams import router as teams_router
from api.v1.routes.users import router as users_router
from api.v1.routes.workspaces import router as workspaces_router

router = APIRouter()
router.include_router(users_router)
router.include_router(notifications_router)
router.include_router(workspaces_router)
router.include_router(teams_router)
router.include_router(workspace_projects_router)
router.include_router(projects_router)
router.include_router(project_sections_router)
router.include_router(sections_router)
router.include_router(project_tasks_router)
router.include_router(tasks_router)
router.include_router(comments_router)
router.include_router(events_router)
