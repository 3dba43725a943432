from fastapi import APIRouter

from statusboard.api.v1.dashboard import router as dashboard_router
from statusboard.api.v1.excel import router as excel_router
from statusboard.api.v1.llm_config import router as llm_config_router
from statusboard.api.v1.projects import router as projects_router
from statusboard.api.v1.technical_reviews import router as technical_reviews_router
from statusboard.api.v1.weekly_reports import router as weekly_reports_router

v1_router = APIRouter()

v1_router.include_router(projects_router)
v1_router.include_router(weekly_reports_router)
v1_router.include_router(technical_reviews_router)
v1_router.include_router(excel_router)
v1_router.include_router(dashboard_router)
v1_router.include_router(llm_config_router)
