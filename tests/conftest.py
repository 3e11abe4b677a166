"""
Shared fixtures: a throwaway home directory laid out like ~/.claude,
plus helpers to drop team configs and session markers into it.
"""

import json
import os
import time
import pytest

from config import Settings


def make_team_config(**overrides) -> dict:
    """A team document shaped like the ones Claude Code writes."""
    config = {
        "name": "test-team",
        "createdAt": 1700000000000,
        "leadAgentId": "agent-123",
        "leadSessionId": "session-abc",
        "members": [
            {
                "agentId": "agent-123",
                "name": "team-lead",
                "agentType": "general-purpose",
                "joinedAt": 1700000000000,
                "isActive": True,
            },
            {
                "agentId": "agent-456",
                "name": "researcher",
                "agentType": "Explore",
                "joinedAt": 1700000001000,
                "prompt": "Research the codebase",
                "model": "sonnet",
                "color": "blue",
                "cwd": "/tmp",
                "isActive": True,
            },
        ],
    }
    config.update(overrides)
    return config


@pytest.fixture
def settings(tmp_path) -> Settings:
    settings = Settings.for_home(tmp_path)
    settings.teams_dir.mkdir(parents=True)
    settings.session_env_dir.mkdir(parents=True)
    return settings


@pytest.fixture
def create_team(settings):
    """Write `config` (dict or raw string) as <teams>/<name>/config.json."""
    def _create(name: str, config=None):
        team_dir = settings.teams_dir / name
        team_dir.mkdir(parents=True, exist_ok=True)
        if config is None:
            config = make_team_config(name=name)
        raw = config if isinstance(config, str) else json.dumps(config, indent=4)
        (team_dir / "config.json").write_text(raw, encoding="utf-8")
        return team_dir
    return _create


@pytest.fixture
def create_session(settings):
    """Create a session marker, optionally with an mtime given in ms since epoch."""
    def _create(session_id: str, mtime_ms=None):
        session_dir = settings.session_env_dir / session_id
        session_dir.mkdir(parents=True, exist_ok=True)
        if mtime_ms is not None:
            mtime_ns = int(mtime_ms) * 1_000_000
            os.utime(session_dir, ns=(mtime_ns, mtime_ns))
        return session_dir
    return _create


@pytest.fixture
def now_ms() -> int:
    # whole seconds so every filesystem stores the mtime exactly
    return int(time.time()) * 1000


def read_config(settings: Settings, name: str) -> dict:
    return json.loads((settings.teams_dir / name / "config.json").read_text(encoding="utf-8"))
