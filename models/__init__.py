# models/__init__.py
from .team import TeamMember, TeamConfig, TEAM_LEAD_NAME
from .lookup import Found, Absent, Lookup
from .results import (
    SessionStatus, MemberStatus, TeamSummary, TeamListing, TeammateToRespawn, TeamJoinResult,
    TeammateDefinition, TeamMembersResult, ErrorKind, OperationError
)
