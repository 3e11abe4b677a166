# config.py
from dotenv import load_dotenv
import os
from pathlib import Path
from pydantic import BaseModel

SERVER_NAME = "claude-team-join"
DEFAULT_ACTIVE_WINDOW_SECONDS = 300


class Settings(BaseModel):
    """Filesystem roots and server options, built once at startup."""
    claude_dir: Path
    teams_dir: Path
    session_env_dir: Path
    skills_dir: Path
    claude_config_path: Path
    session_active_window_seconds: int = DEFAULT_ACTIVE_WINDOW_SECONDS
    log_level: str = "INFO"
    mcp_transport: str = "stdio"
    mcp_port: int = 5001

    @property
    def session_active_window_ms(self) -> int:
        return self.session_active_window_seconds * 1000

    @classmethod
    def for_home(cls, home, **overrides) -> "Settings":
        """Standard layout under a home directory (~/.claude, ~/.claude.json)."""
        home = Path(home)
        claude_dir = home / ".claude"
        values = dict(
            claude_dir=claude_dir,
            teams_dir=claude_dir / "teams",
            session_env_dir=claude_dir / "session-env",
            skills_dir=claude_dir / "skills",
            claude_config_path=home / ".claude.json",
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        home = Path.home()
        claude_dir = Path(os.getenv("CLAUDE_HOME", str(home / ".claude"))).expanduser()

        return cls(
            claude_dir=claude_dir,
            teams_dir=Path(os.getenv("CLAUDE_TEAMS_DIR", str(claude_dir / "teams"))).expanduser(),
            session_env_dir=Path(os.getenv("CLAUDE_SESSION_ENV_DIR", str(claude_dir / "session-env"))).expanduser(),
            skills_dir=Path(os.getenv("CLAUDE_SKILLS_DIR", str(claude_dir / "skills"))).expanduser(),
            claude_config_path=Path(os.getenv("CLAUDE_CONFIG_PATH", str(home / ".claude.json"))).expanduser(),
            session_active_window_seconds=int(
                os.getenv("SESSION_ACTIVE_WINDOW_SECONDS", str(DEFAULT_ACTIVE_WINDOW_SECONDS))
            ),
            log_level=os.getenv("TEAM_JOIN_LOG_LEVEL", "INFO"),
            mcp_transport=os.getenv("MCP_TRANSPORT", "stdio"),
            mcp_port=int(os.getenv("MCP_PORT", "5001")),
        )
