"""Tests for services.team_operations."""

import json
import pytest

from conftest import make_team_config, read_config
from models.results import (
    TeamListing, TeamJoinResult, TeamMembersResult, OperationError, ErrorKind, SessionStatus
)
from services.team_operations import TeamOperationsService, format_timestamp


@pytest.fixture
def service(settings):
    return TeamOperationsService.from_settings(settings)


class TestFormatTimestamp:

    def test_known_epoch(self):
        assert format_timestamp(1700000000000) == "2023-11-14 22:13:20 UTC"

    def test_zero(self):
        assert format_timestamp(0) == "1970-01-01 00:00:00 UTC"

    def test_drops_milliseconds(self):
        assert format_timestamp(1700000000999) == "2023-11-14 22:13:20 UTC"

    def test_truncates_fractional_milliseconds(self):
        assert format_timestamp(1999.9999999) == "1970-01-01 00:00:01 UTC"

    @pytest.mark.parametrize("value", ["1700000000000", True, [1], float("nan"), 1e300])
    def test_unusable_values(self, value):
        assert format_timestamp(value) == "(unknown)"

    def test_missing(self):
        assert format_timestamp(None) == "(unknown)"


class TestListTeams:

    def test_no_teams(self, service, settings):
        listing = service.list_teams()

        assert isinstance(listing, TeamListing)
        assert listing.teams == []
        assert listing.message == f"No teams found in {settings.teams_dir}"

    def test_summary_fields(self, service, create_team, create_session, now_ms):
        create_session("session-abc", now_ms - 10 * 60 * 1000)
        create_session("session-now", now_ms)
        create_team("alpha", make_team_config(name="alpha", description="Alpha"))

        listing = service.list_teams()

        assert listing.message is None
        assert len(listing.teams) == 1
        summary = listing.teams[0]
        assert summary.teamName == "alpha"
        assert summary.description == "Alpha"
        assert summary.createdAt == "2023-11-14 22:13:20 UTC"
        assert summary.memberCount == 2
        assert [(m.name, m.role, m.isActive) for m in summary.members] == [
            ("team-lead", "general-purpose", True),
            ("researcher", "Explore", True),
        ]
        assert summary.leadSessionId == "session-abc"
        assert summary.leadSessionStatus == SessionStatus.STALE

    def test_missing_description_and_is_active(self, service, create_team):
        config = make_team_config()
        del config["members"][0]["isActive"]
        create_team("plain", config)

        summary = service.list_teams().teams[0]

        assert summary.description == "(no description)"
        assert summary.members[0].isActive is False

    def test_lead_session_statuses(self, service, create_team, create_session, now_ms):
        create_session("old", now_ms - 10 * 60 * 1000)
        create_session("other", now_ms - 60 * 1000)
        create_session("mine", now_ms)
        create_team("a-current", make_team_config(leadSessionId="mine"))
        create_team("b-other", make_team_config(leadSessionId="other"))
        create_team("c-stale", make_team_config(leadSessionId="old"))
        create_team("d-gone", make_team_config(leadSessionId="vanished"))

        statuses = {t.teamName: t.leadSessionStatus for t in service.list_teams().teams}

        assert statuses == {
            "a-current": SessionStatus.CURRENT,
            "b-other": SessionStatus.ACTIVE_OTHER,
            "c-stale": SessionStatus.STALE,
            "d-gone": SessionStatus.STALE,
        }

    def test_skips_unreadable_team(self, service, settings, create_team):
        create_team("good")
        create_team("bad", "{oops")
        (settings.teams_dir / "no-config").mkdir()

        listing = service.list_teams()

        assert [t.teamName for t in listing.teams] == ["good"]

    def test_skips_team_nested_too_deep_to_parse(self, service, create_team):
        create_team("good")
        create_team("deep", "[" * 100000 + "]" * 100000)

        assert [t.teamName for t in service.list_teams().teams] == ["good"]

    def test_lists_team_with_mistyped_fields(self, service, create_team):
        create_team("odd", json.dumps({"members": ["x", {"name": 5}], "leadSessionId": 42}))

        summary = service.list_teams().teams[0]

        assert summary.memberCount == 2
        assert summary.leadSessionId == 42
        assert summary.leadSessionStatus == SessionStatus.STALE
        assert [(m.name, m.isActive) for m in summary.members] == [(None, False), (5, False)]

    def test_all_unreadable_is_empty_list_without_message(self, service, create_team):
        create_team("bad", json.dumps({"name": "bad"}))

        listing = service.list_teams()

        assert listing.teams == []
        assert listing.message is None


class TestTeamJoin:

    def test_join_updates_config(self, service, settings, create_team, create_session):
        create_team("alpha")
        create_session("session-new")

        result = service.team_join("alpha")

        assert isinstance(result, TeamJoinResult)
        saved = read_config(settings, "alpha")
        assert saved["leadSessionId"] == "session-new"
        assert saved["leadAgentId"] == "team-lead@alpha"
        assert all(m["isActive"] is False for m in saved["members"])

    def test_join_result(self, service, create_team, create_session):
        create_team("alpha", make_team_config(name="alpha", description="Alpha"))
        create_session("session-new")

        result = service.team_join("alpha")

        assert result.status == "joined"
        assert result.teamName == "alpha"
        assert result.description == "Alpha"
        assert result.previousSessionId == "session-abc"
        assert result.newSessionId == "session-new"
        assert result.membersResetToInactive == 2
        assert [(t.name, t.role, t.hasPrompt) for t in result.teammatesReadyToRespawn] == [
            ("researcher", "Explore", True),
        ]

    def test_members_without_is_active_are_reset(self, service, settings, create_team, create_session):
        config = make_team_config()
        config["members"].append({"agentId": "agent-789", "name": "writer", "agentType": "general-purpose"})
        create_team("alpha", config)
        create_session("s1")

        result = service.team_join("alpha")

        assert result.membersResetToInactive == 3
        assert [t.hasPrompt for t in result.teammatesReadyToRespawn] == [True, False]
        assert [m["isActive"] for m in read_config(settings, "alpha")["members"]] == [False, False, False]

    def test_join_keeps_other_fields(self, service, settings, create_team, create_session):
        config = make_team_config(description="Keep me")
        config["members"][1]["backendType"] = "tmux"
        create_team("alpha", config)
        create_session("s1")

        service.team_join("alpha")

        saved = read_config(settings, "alpha")
        assert saved["description"] == "Keep me"
        assert saved["createdAt"] == 1700000000000
        assert saved["members"][1]["backendType"] == "tmux"
        assert saved["members"][1]["prompt"] == "Research the codebase"

    def test_join_writes_back_untouched_values_verbatim(self, service, settings, create_team, create_session):
        document = {
            "members": [{"name": "a", "joinedAt": "1700000000000", "planModeRequired": "yes"}],
            "createdAt": "1700000000000",
        }
        create_team("odd", json.dumps(document))
        create_session("s1")

        result = service.team_join("odd")

        assert isinstance(result, TeamJoinResult)
        assert read_config(settings, "odd") == {
            "members": [{"name": "a", "joinedAt": "1700000000000", "planModeRequired": "yes", "isActive": False}],
            "createdAt": "1700000000000",
            "leadSessionId": "s1",
            "leadAgentId": "team-lead@odd",
        }

    def test_join_keeps_key_order(self, service, settings, create_team, create_session):
        create_team("alpha")
        create_session("s1")

        service.team_join("alpha")

        saved = read_config(settings, "alpha")
        assert list(saved) == list(make_team_config())
        assert list(saved["members"][1]) == list(make_team_config()["members"][1])

    def test_join_with_non_object_members(self, service, settings, create_team, create_session):
        create_team("odd", json.dumps({"members": ["x", {"name": "worker", "agentType": "Explore"}]}))
        create_session("s1")

        result = service.team_join("odd")

        assert result.membersResetToInactive == 2
        assert [(t.name, t.role) for t in result.teammatesReadyToRespawn] == [(None, None), ("worker", "Explore")]
        assert read_config(settings, "odd")["members"] == [
            "x", {"name": "worker", "agentType": "Explore", "isActive": False}
        ]

    def test_unknown_team(self, service, create_session):
        create_session("s1")

        result = service.team_join("ghost")

        assert isinstance(result, OperationError)
        assert result.kind == ErrorKind.NOT_FOUND
        assert 'Team "ghost" not found' in result.message

    def test_traversal_name_is_not_found(self, service, settings, create_session):
        create_session("s1")
        escape_dir = settings.claude_dir / "escape"
        escape_dir.mkdir()
        (escape_dir / "config.json").write_text(json.dumps(make_team_config()))

        result = service.team_join("../escape")

        assert result.kind == ErrorKind.NOT_FOUND
        assert json.loads((escape_dir / "config.json").read_text())["leadSessionId"] == "session-abc"

    def test_no_current_session(self, service, settings, create_team):
        team_dir = create_team("alpha")
        before = (team_dir / "config.json").read_text()

        result = service.team_join("alpha")

        assert result.kind == ErrorKind.NO_CURRENT_SESSION
        assert "Could not detect current session ID" in result.message
        assert (team_dir / "config.json").read_text() == before

    def test_write_failure(self, service, create_team, create_session, monkeypatch):
        team_dir = create_team("alpha")
        create_session("s1")
        before = (team_dir / "config.json").read_text()

        def fail_replace(src, dst):
            raise PermissionError("Permission denied")

        monkeypatch.setattr("services.team_store.os.replace", fail_replace)

        result = service.team_join("alpha")

        assert result.kind == ErrorKind.WRITE_FAILED
        assert result.message == "Error: Failed to write team config: Permission denied"
        assert (team_dir / "config.json").read_text() == before

    def test_rejoin_records_previous_session(self, service, create_team, create_session, now_ms):
        create_team("alpha")
        create_session("first", now_ms - 60_000)
        service.team_join("alpha")
        create_session("second", now_ms)

        result = service.team_join("alpha")

        assert result.previousSessionId == "first"
        assert result.newSessionId == "second"


class TestGetTeamMembers:

    def test_projects_teammates(self, service, create_team):
        create_team("alpha", make_team_config(description="Alpha"))

        result = service.get_team_members("alpha")

        assert isinstance(result, TeamMembersResult)
        assert result.teamName == "alpha"
        assert result.description == "Alpha"
        assert len(result.teammates) == 1
        mate = result.teammates[0]
        assert mate.name == "researcher"
        assert mate.agentType == "Explore"
        assert mate.model == "sonnet"
        assert mate.prompt == "Research the codebase"
        assert mate.color == "blue"
        assert mate.cwd == "/tmp"
        assert mate.planModeRequired is False
        assert mate.previousAgentId == "agent-456"

    def test_plan_mode_flag(self, service, create_team):
        config = make_team_config()
        config["members"][1]["planModeRequired"] = True
        create_team("alpha", config)

        assert service.get_team_members("alpha").teammates[0].planModeRequired is True

    def test_missing_plan_mode_defaults_to_false(self, service, create_team):
        create_team("odd", json.dumps({"members": [{"name": "worker", "planModeRequired": None}, {"name": 7}]}))

        teammates = service.get_team_members("odd").teammates

        assert [(t.name, t.planModeRequired) for t in teammates] == [("worker", False), (7, False)]

    def test_only_lead(self, service, create_team):
        config = make_team_config()
        config["members"] = config["members"][:1]
        create_team("solo", config)

        assert service.get_team_members("solo").teammates == []

    def test_does_not_modify_config(self, service, create_team):
        team_dir = create_team("alpha")
        before = (team_dir / "config.json").read_text()

        service.get_team_members("alpha")

        assert (team_dir / "config.json").read_text() == before

    def test_unknown_team(self, service):
        result = service.get_team_members("ghost")

        assert result.kind == ErrorKind.NOT_FOUND
        assert "not found" in result.message
