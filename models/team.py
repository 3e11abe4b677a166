# models/team.py
from typing import Any, Dict, List

TEAM_LEAD_NAME = "team-lead"


class TeamMember:
    """
    View over one element of a team's `members` array.

    Values are returned exactly as they were read, whatever their JSON type; a
    null or missing key reads as `default`. Elements that are not JSON objects
    read as empty and cannot be modified.
    """

    def __init__(self, raw: Any):
        self.raw = raw

    def get(self, key: str, default: Any = None) -> Any:
        if not isinstance(self.raw, dict):
            return default
        value = self.raw.get(key)
        return default if value is None else value

    @property
    def agentId(self) -> Any:
        return self.get("agentId")

    @property
    def name(self) -> Any:
        return self.get("name")

    @property
    def agentType(self) -> Any:
        return self.get("agentType")

    @property
    def model(self) -> Any:
        return self.get("model")

    @property
    def prompt(self) -> Any:
        return self.get("prompt")

    @property
    def color(self) -> Any:
        return self.get("color")

    @property
    def cwd(self) -> Any:
        return self.get("cwd")

    @property
    def planModeRequired(self) -> Any:
        return self.get("planModeRequired", False)

    @property
    def isActive(self) -> Any:
        return self.get("isActive", False)

    @property
    def is_lead(self) -> bool:
        return self.name == TEAM_LEAD_NAME

    def deactivate(self) -> None:
        if isinstance(self.raw, dict):
            self.raw["isActive"] = False


class TeamConfig:
    """
    A team's config.json, kept as the parsed document.

    Only a JSON object with a `members` array is accepted (see `is_valid_document`);
    nothing else about its content is checked. Setters write straight into the
    document, so `to_document()` returns every other key untouched and in its
    original order.
    """

    def __init__(self, document: Dict[str, Any]):
        if not self.is_valid_document(document):
            raise ValueError("team config must be a JSON object with a members array")
        self.document = document

    @staticmethod
    def is_valid_document(document: Any) -> bool:
        return isinstance(document, dict) and isinstance(document.get("members"), list)

    @property
    def name(self) -> Any:
        return self.document.get("name")

    @property
    def description(self) -> Any:
        return self.document.get("description")

    @property
    def createdAt(self) -> Any:
        return self.document.get("createdAt")

    @property
    def leadAgentId(self) -> Any:
        return self.document.get("leadAgentId")

    @leadAgentId.setter
    def leadAgentId(self, value: str) -> None:
        self.document["leadAgentId"] = value

    @property
    def leadSessionId(self) -> Any:
        return self.document.get("leadSessionId")

    @leadSessionId.setter
    def leadSessionId(self, value: str) -> None:
        self.document["leadSessionId"] = value

    @property
    def members(self) -> List[TeamMember]:
        return [TeamMember(raw) for raw in self.document["members"]]

    @property
    def teammates(self) -> List[TeamMember]:
        """Members that can be re-spawned, i.e. everyone but the lead record."""
        return [m for m in self.members if not m.is_lead]

    def to_document(self) -> Dict[str, Any]:
        return self.document
