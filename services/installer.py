# services/installer.py
import json
import logging
from pathlib import Path
from pydantic import BaseModel
from config import SERVER_NAME

logger = logging.getLogger(__name__)

MCP_SERVER_ENTRY = {
    "type": "stdio",
    "command": SERVER_NAME,
    "args": ["serve"],
}


class InstallResult(BaseModel):
    success: bool
    message: str


def _write_config(config_path: Path, config: dict) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def install_mcp_server(config_path) -> InstallResult:
    """
    Register this server under `mcpServers` in the host's JSON config.

    A missing file is created. A file that isn't a JSON object is never
    overwritten; the user has to fix it first.
    """
    config_path = Path(config_path)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        config = {}
    except OSError as e:
        return InstallResult(success=False, message=f"Error: could not read {config_path}: {str(e)}")
    else:
        try:
            config = json.loads(raw)
        except ValueError:
            config = None
        if not isinstance(config, dict):
            logger.error(f"{config_path} contains malformed JSON, not modifying it")
            return InstallResult(
                success=False,
                message=f"Error: {config_path} contains malformed JSON. Fix it manually before running --install.",
            )

    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        servers = config["mcpServers"] = {}
    servers[SERVER_NAME] = dict(MCP_SERVER_ENTRY)

    try:
        _write_config(config_path, config)
    except OSError as e:
        return InstallResult(success=False, message=f"Error: could not write {config_path}: {str(e)}")
    logger.info(f"Registered {SERVER_NAME} in {config_path}")

    return InstallResult(
        success=True,
        message=f"Added {SERVER_NAME} to {config_path}\n  Restart Claude Code to pick up the new MCP server.",
    )


def uninstall_mcp_server(config_path) -> InstallResult:
    config_path = Path(config_path)
    not_configured = InstallResult(success=True, message=f"{SERVER_NAME} is not configured in {config_path}")

    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return not_configured

    servers = config.get("mcpServers") if isinstance(config, dict) else None
    if not isinstance(servers, dict) or SERVER_NAME not in servers:
        return not_configured

    del servers[SERVER_NAME]
    try:
        _write_config(config_path, config)
    except OSError as e:
        return InstallResult(success=False, message=f"Error: could not write {config_path}: {str(e)}")
    logger.info(f"Removed {SERVER_NAME} from {config_path}")

    return InstallResult(success=True, message=f"Removed {SERVER_NAME} from {config_path}")
