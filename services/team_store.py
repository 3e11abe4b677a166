# services/team_store.py
import os
import json
import logging
import tempfile
from pathlib import Path
from typing import List
from config import Settings
from models.team import TeamConfig
from models.lookup import Found, Absent, Lookup
from services.paths import is_single_segment

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class InvalidTeamNameError(ValueError):
    """Raised when a write targets a team name that is not a single path segment."""

    def __init__(self, team_name):
        super().__init__(f"Invalid team name: {team_name!r}")
        self.team_name = team_name


class TeamStore:
    """Reads and writes `<teams_dir>/<team>/config.json`. Nothing else touches team JSON."""

    def __init__(self, settings: Settings):
        self.teams_dir = Path(settings.teams_dir)

    def config_path(self, team_name: str) -> Path:
        return self.teams_dir / team_name / CONFIG_FILENAME

    def list_team_names(self) -> List[str]:
        """
        Names of the immediate subdirectories of the teams root.

        Returns an empty list if the root is missing, unreadable or not a directory.
        """
        try:
            with os.scandir(self.teams_dir) as entries:
                names = [entry.name for entry in entries if entry.is_dir()]
        except OSError as e:
            logger.debug(f"Cannot list teams in {self.teams_dir}: {str(e)}")
            return []

        return sorted(names)

    def read_team_config(self, team_name: str) -> Lookup[TeamConfig]:
        if not is_single_segment(team_name):
            logger.debug(f"Rejected team name {team_name!r}")
            return Absent("invalid-name")

        config_path = self.config_path(team_name)
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except (FileNotFoundError, NotADirectoryError):
            return Absent("missing")
        except UnicodeDecodeError as e:
            logger.debug(f"Team config {config_path} is not UTF-8: {str(e)}")
            return Absent("malformed-json")
        except OSError as e:
            logger.warning(f"Could not read team config {config_path}: {str(e)}")
            return Absent("unreadable")

        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            logger.debug(f"Team config {config_path} is not valid JSON: {str(e)}")
            return Absent("malformed-json")

        if not TeamConfig.is_valid_document(parsed):
            logger.debug(f"Team config {config_path} has no members array")
            return Absent("invalid-shape")

        return Found(TeamConfig(parsed))

    def write_team_config(self, team_name: str, config: TeamConfig) -> None:
        """
        Persist a team config, pretty-printed with 4-space indentation.

        The document is serialized before anything touches the disk and then
        swapped in with os.replace, so a failed write leaves the previous file
        intact. Raises InvalidTeamNameError for unsafe names and OSError when the
        team directory is missing or not writable.
        """
        if not is_single_segment(team_name):
            raise InvalidTeamNameError(team_name)

        config_path = self.config_path(team_name)
        payload = json.dumps(config.to_document(), indent=4, ensure_ascii=False)

        fd, tmp_path = tempfile.mkstemp(
            dir=config_path.parent, prefix=f".{CONFIG_FILENAME}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # mkstemp creates 0600; keep whatever mode the existing config had
            try:
                os.chmod(tmp_path, config_path.stat().st_mode & 0o777)
            except FileNotFoundError:
                os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, config_path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise

        logger.info(f"Wrote team config {config_path}")
