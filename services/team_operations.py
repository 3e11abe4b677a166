# services/team_operations.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Union
from config import Settings
from models.team import TeamConfig
from models.lookup import Absent
from models.results import (
    MemberStatus, TeamSummary, TeamListing, TeammateToRespawn, TeamJoinResult,
    TeammateDefinition, TeamMembersResult, ErrorKind, OperationError
)
from services.team_store import TeamStore
from services.sessions import SessionDirectory

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "(no description)"
UNKNOWN_TIMESTAMP = "(unknown)"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_timestamp(ts_ms: Any) -> str:
    """
    Render a ms epoch as `YYYY-MM-DD HH:MM:SS UTC`.

    Fractional milliseconds are truncated toward zero before the conversion so
    that 1999.9999 ms still renders as second 1. Anything that isn't a number
    renders as `(unknown)`.
    """
    if isinstance(ts_ms, bool) or not isinstance(ts_ms, (int, float)):
        return UNKNOWN_TIMESTAMP
    try:
        moment = _EPOCH + timedelta(milliseconds=int(ts_ms))
    except (OverflowError, ValueError):
        logger.warning(f"Timestamp out of range: {ts_ms}")
        return UNKNOWN_TIMESTAMP
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def lead_agent_id(team_name: str) -> str:
    return f"team-lead@{team_name}"


def team_not_found(team_name: str) -> OperationError:
    return OperationError(
        kind=ErrorKind.NOT_FOUND,
        message=f'Error: Team "{team_name}" not found. Use list_teams to see available teams.'
    )


class TeamOperationsService:
    """The list / join / inspect operations, built on TeamStore and SessionDirectory."""

    def __init__(self, store: TeamStore, sessions: SessionDirectory):
        self.store = store
        self.sessions = sessions

    @classmethod
    def from_settings(cls, settings: Settings) -> "TeamOperationsService":
        return cls(TeamStore(settings), SessionDirectory(settings))

    def list_teams(self) -> TeamListing:
        team_names = self.store.list_team_names()
        if not team_names:
            return TeamListing(message=f"No teams found in {self.store.teams_dir}")

        current = self.sessions.current_session_id()
        summaries = []

        for name in team_names:
            lookup = self.store.read_team_config(name)
            if isinstance(lookup, Absent):
                logger.debug(f"Skipping team {name!r}: {lookup.reason}")
                continue
            config = lookup.value

            summaries.append(TeamSummary(
                teamName=name,
                description=config.description if config.description is not None else NO_DESCRIPTION,
                createdAt=format_timestamp(config.createdAt),
                memberCount=len(config.members),
                members=[
                    MemberStatus(name=m.name, role=m.agentType, isActive=m.isActive)
                    for m in config.members
                ],
                leadSessionId=config.leadSessionId,
                leadSessionStatus=self.sessions.session_status(config.leadSessionId, current),
            ))

        return TeamListing(teams=summaries)

    def team_join(self, team_name: str) -> Union[TeamJoinResult, OperationError]:
        """
        Make the current session the lead of `team_name`.

        Points leadSessionId at the newest session marker, resets leadAgentId to
        `team-lead@<team>` and marks every member inactive so that teammates can be
        re-spawned. Nothing is written if the team or the current session can't be
        found; a failed write is reported and leaves the file as it was.
        """
        lookup = self.store.read_team_config(team_name)
        if isinstance(lookup, Absent):
            return team_not_found(team_name)
        config: TeamConfig = lookup.value

        current = self.sessions.current_session_id()
        if isinstance(current, Absent):
            return OperationError(
                kind=ErrorKind.NO_CURRENT_SESSION,
                message=f"Error: Could not detect current session ID from {self.sessions.root}"
            )

        previous_session_id = config.leadSessionId
        config.leadSessionId = current.value
        config.leadAgentId = lead_agent_id(team_name)
        for member in config.members:
            member.deactivate()

        try:
            self.store.write_team_config(team_name, config)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write team config for {team_name!r}: {str(e)}")
            return OperationError(
                kind=ErrorKind.WRITE_FAILED,
                message=f"Error: Failed to write team config: {str(e)}"
            )

        logger.info(
            f"Joined team {team_name!r} as lead (session {previous_session_id} -> {current.value})"
        )

        return TeamJoinResult(
            teamName=team_name,
            description=config.description,
            previousSessionId=previous_session_id,
            newSessionId=current.value,
            membersResetToInactive=len(config.members),
            teammatesReadyToRespawn=[
                TeammateToRespawn(name=m.name, role=m.agentType, hasPrompt=bool(m.prompt))
                for m in config.teammates
            ],
        )

    def get_team_members(self, team_name: str) -> Union[TeamMembersResult, OperationError]:
        lookup = self.store.read_team_config(team_name)
        if isinstance(lookup, Absent):
            return team_not_found(team_name)
        config = lookup.value

        return TeamMembersResult(
            teamName=team_name,
            description=config.description,
            teammates=[
                TeammateDefinition(
                    name=m.name,
                    agentType=m.agentType,
                    model=m.model,
                    prompt=m.prompt,
                    color=m.color,
                    planModeRequired=m.planModeRequired,
                    cwd=m.cwd,
                    previousAgentId=m.agentId,
                )
                for m in config.teammates
            ],
        )
