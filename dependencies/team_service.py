# dependencies/team_service.py
from fastapi import Request
from config import Settings
from services.team_operations import TeamOperationsService


def get_settings(request: Request) -> Settings:
    """Settings the app was built with (see main.create_app)."""
    return request.app.state.settings


def get_team_service(request: Request) -> TeamOperationsService:
    # Built per request; the service holds no state besides the root paths
    return TeamOperationsService.from_settings(get_settings(request))
