# services/skills.py
import shutil
import logging
from pathlib import Path
from typing import List
from pydantic import BaseModel

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"


class Skill(BaseModel):
    dir_name: str
    content: str


TEAM_JOIN_SKILL = """---
name: team-join
description: Rejoin an orphaned Claude Code agent team as its lead. Use when the user says "rejoin team", "join team", "reconnect team", "resume team", "rejoin the <name> team", or wants to take over an existing team.
allowed-tools: Read, Write, Bash, Glob
---

# Rejoin a Claude Code Team

## Step 1: Pick the team

Use the team name the user gave you. If they did not name one, call the
`list_teams` tool (or run `ls ~/.claude/teams/`) and ask which team to rejoin.
Teams whose lead session is `stale` are the usual candidates.

If there are no teams, say so and stop.

## Step 2: Join

Call the `team_join` tool with `team_name`.

- If the result mentions `not found`, the team has no readable config. Tell the
  user and stop.
- If the result mentions `Could not detect`, no session marker exists under
  `~/.claude/session-env/`. Tell the user the current session could not be
  detected and stop.
- If the result mentions `Failed to write`, report the error verbatim.

Without the tool, do the same by hand: read `~/.claude/teams/{team_name}/config.json`,
take the newest entry of `ls -t ~/.claude/session-env/ | head -1` as the session
ID, set `leadSessionId` to it, set `leadAgentId` to `team-lead@{team_name}`,
set `isActive` to `false` on every member and write the file back with a
4-space indent.

## Step 3: Report

Tell the user:
- the team was rejoined, and which session it was taken over from
- how many members were reset to inactive
- each teammate in `teammatesReadyToRespawn` with its role

Then offer to re-spawn the teammates (see the team-members skill).
"""

TEAM_LIST_SKILL = """---
name: team-list
description: List all Claude Code agent teams and their lead session status. Use when the user says "list teams", "show teams", "my teams", "orphaned teams" or "team status".
allowed-tools: Read, Bash, Glob
---

# List Claude Code Agent Teams

## Step 1: Fetch the teams

Call the `list_teams` tool. If the result says `No teams found`, tell the user
there are no teams and stop.

Without the tool, read every `~/.claude/teams/{team_name}/config.json` and skip
the ones that are missing or unreadable.

## Step 2: Lead session status

Each team carries a `leadSessionStatus`:

- **current**: this session already leads the team
- **active-other**: another session touched its marker in the last 5 minutes
- **stale**: nobody has led the team for at least 5 minutes

By hand: the newest directory in `~/.claude/session-env/` is the current
session; a lead session is active when its directory was modified less than
300 seconds ago.

## Step 3: Present

For each team show the name, the description (or "no description"), the
creation time, the members with their roles, and the lead session status.
Point out stale teams as candidates for the team-join skill.
"""

TEAM_MEMBERS_SKILL = """---
name: team-members
description: Get teammate definitions from a Claude Code team so they can be re-spawned. Use when the user says "team members", "show teammates", "re-spawn teammates" or "respawn agents".
allowed-tools: Read, Bash, Glob
---

# Re-spawn Teammates of a Claude Code Team

## Step 1: Pick the team

Use the team name the user gave you, or call `list_teams` and ask.

## Step 2: Fetch the teammates

Call the `get_team_members` tool with `team_name`. If the result mentions
`not found`, tell the user and stop.

Without the tool, read `~/.claude/teams/{team_name}/config.json` and drop the
member whose `name` is `"team-lead"`; that record is the lead, not a teammate.

For each teammate present its name, agentType, model, prompt, cwd and whether
plan mode is required (false when missing).

## Step 3: Offer to re-spawn

If the user agrees, spawn every teammate with the Task tool in a single
message so they start in parallel:

```
Task tool parameters:
  - name: {teammate.name}
  - subagent_type: {teammate.agentType}
  - model: {teammate.model}
  - prompt: {teammate.prompt}
  - team_name: {team_name}
  - mode: "plan" (only if planModeRequired is true)
```
"""

SKILLS: List[Skill] = [
    Skill(dir_name="team-join", content=TEAM_JOIN_SKILL),
    Skill(dir_name="team-list", content=TEAM_LIST_SKILL),
    Skill(dir_name="team-members", content=TEAM_MEMBERS_SKILL),
]


def install_skills(skills_dir) -> List[Path]:
    """Write every bundled skill to `<skills_dir>/<name>/SKILL.md`, replacing older copies."""
    skills_dir = Path(skills_dir)
    written = []

    for skill in SKILLS:
        skill_dir = skills_dir / skill.dir_name
        skill_dir.mkdir(parents=True, exist_ok=True)
        path = skill_dir / SKILL_FILENAME
        path.write_text(skill.content, encoding="utf-8")
        written.append(path)

    logger.info(f"Installed {len(written)} skills into {skills_dir}")
    return written


def uninstall_skills(skills_dir) -> List[str]:
    """Remove the bundled skill directories. Other directories in `skills_dir` are left alone."""
    skills_dir = Path(skills_dir)
    removed = []

    for skill in SKILLS:
        skill_dir = skills_dir / skill.dir_name
        if skill_dir.is_dir():
            shutil.rmtree(skill_dir)
            removed.append(skill.dir_name)

    logger.info(f"Removed {len(removed)} skills from {skills_dir}")
    return removed
