# /mcp_server.py
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
import logging
import json
from typing import Optional, Union
from pydantic import BaseModel
from config import Settings, SERVER_NAME
from models.results import OperationError
from services.team_operations import TeamOperationsService

logger = logging.getLogger(__name__)


def render(result: Union[BaseModel, OperationError]) -> str:
    """
    Serialize an operation result as the tool's text content.

    Error values are raised as ToolError so the SDK reports them with isError set;
    the message text is kept verbatim because skill documents match on it.
    """
    if isinstance(result, OperationError):
        logger.info(f"Tool error ({result.kind.value}): {result.message}")
        raise ToolError(result.message)
    return json.dumps(result.model_dump(mode="json", exclude_none=True), indent=2, ensure_ascii=False)


def create_mcp_server(settings: Optional[Settings] = None,
                      service: Optional[TeamOperationsService] = None) -> FastMCP:
    """
    Create an MCP server exposing list_teams, team_join and get_team_members.
    """
    settings = settings or Settings.from_env()
    service = service or TeamOperationsService.from_settings(settings)

    mcp = FastMCP(SERVER_NAME, port=settings.mcp_port)
    logger.info(f"MCP server created with name: {SERVER_NAME}, teams: {settings.teams_dir}")

    @mcp.tool()
    def list_teams() -> str:
        """
        List all Claude Code agent teams with their members and whether the lead
        session is the current one, another active session, or stale.
        """
        listing = service.list_teams()
        if listing.message is not None:
            return listing.message
        teams = [team.model_dump(mode="json", exclude_none=True) for team in listing.teams]
        return json.dumps(teams, indent=2, ensure_ascii=False)

    @mcp.tool()
    def team_join(team_name: str) -> str:
        """
        Rejoin an existing team as its lead: points the team at the current session
        and marks every teammate inactive so they can be re-spawned.
        """
        return render(service.team_join(team_name))

    @mcp.tool()
    def get_team_members(team_name: str) -> str:
        """
        Get the spawn configuration (agent type, model, prompt, cwd, plan mode) of
        every teammate in a team, excluding the team lead.
        """
        return render(service.get_team_members(team_name))

    return mcp


def run_mcp_server(settings: Settings) -> None:
    mcp = create_mcp_server(settings)
    logger.info(f"Starting MCP server over {settings.mcp_transport}")
    mcp.run(transport=settings.mcp_transport)
