# models/results.py
from typing import Any, Optional, List
from enum import Enum
from pydantic import BaseModel


class SessionStatus(str, Enum):
    CURRENT = "current"
    ACTIVE_OTHER = "active-other"
    STALE = "stale"


class MemberStatus(BaseModel):
    name: Any = None
    role: Any = None
    isActive: Any = False


class TeamSummary(BaseModel):
    teamName: str
    description: Any
    createdAt: str
    memberCount: int
    members: List[MemberStatus] = []
    leadSessionId: Any = None
    leadSessionStatus: SessionStatus


class TeamListing(BaseModel):
    teams: List[TeamSummary] = []
    # Set only when the teams root holds no team directories at all
    message: Optional[str] = None


class TeammateToRespawn(BaseModel):
    name: Any = None
    role: Any = None
    hasPrompt: bool = False


class TeamJoinResult(BaseModel):
    status: str = "joined"
    teamName: str
    description: Any = None
    previousSessionId: Any = None
    newSessionId: str
    membersResetToInactive: int
    teammatesReadyToRespawn: List[TeammateToRespawn] = []


class TeammateDefinition(BaseModel):
    name: Any = None
    agentType: Any = None
    model: Any = None
    prompt: Any = None
    color: Any = None
    planModeRequired: Any = False
    cwd: Any = None
    previousAgentId: Any = None


class TeamMembersResult(BaseModel):
    teamName: str
    description: Any = None
    teammates: List[TeammateDefinition] = []


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    NO_CURRENT_SESSION = "no_current_session"
    WRITE_FAILED = "write_failed"


class OperationError(BaseModel):
    kind: ErrorKind
    message: str
