# api/v1/teams.py
from fastapi import APIRouter, Depends, HTTPException
import logging
from models.results import TeamListing, TeamJoinResult, TeamMembersResult, ErrorKind, OperationError
from dependencies.team_service import get_team_service
from services.team_operations import TeamOperationsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/teams", tags=["teams"])

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_CURRENT_SESSION: 409,
    ErrorKind.WRITE_FAILED: 500,
}


def raise_for_error(result):
    if isinstance(result, OperationError):
        raise HTTPException(status_code=ERROR_STATUS[result.kind], detail=result.message)
    return result


@router.get("", response_model=TeamListing, response_model_exclude_none=True)
async def list_teams(service: TeamOperationsService = Depends(get_team_service)):
    """
    List all teams with member activity and lead session status.
    `message` is set instead of `teams` when no team directories exist.
    """
    return service.list_teams()


@router.post("/{team_name}/join", response_model=TeamJoinResult, response_model_exclude_none=True)
async def join_team(team_name: str, service: TeamOperationsService = Depends(get_team_service)):
    """Make the current session the lead of the team and reset all members to inactive"""
    return raise_for_error(service.team_join(team_name))


@router.get("/{team_name}/members", response_model=TeamMembersResult, response_model_exclude_none=True)
async def get_team_members(team_name: str, service: TeamOperationsService = Depends(get_team_service)):
    """Get the spawn configuration of every teammate except the lead"""
    return raise_for_error(service.get_team_members(team_name))
