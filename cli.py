# /cli.py
import argparse
import logging
import sys
import uvicorn
from config import Settings
from main import configure_logging, create_app
from mcp_server import run_mcp_server
from services.installer import install_mcp_server, uninstall_mcp_server
from services.skills import install_skills, uninstall_skills

logger = logging.getLogger(__name__)

# flag spellings accepted for compatibility with `claude-team-join --install`
COMMAND_ALIASES = {
    "--install": "install",
    "--uninstall": "uninstall",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-team-join",
        description="Rejoin orphaned Claude Code agent teams"
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the MCP server (default)")

    http_parser = subparsers.add_parser("http", help="Run the HTTP API")
    http_parser.add_argument("--host", default="127.0.0.1")
    http_parser.add_argument("--port", type=int, default=8000)

    subparsers.add_parser("install", help="Register the MCP server and install skills")
    subparsers.add_parser("uninstall", help="Unregister the MCP server and remove skills")
    return parser


def handle_install(settings: Settings) -> int:
    result = install_mcp_server(settings.claude_config_path)
    if not result.success:
        print(result.message)
        return 1
    print(f"✓ {result.message}")

    written = install_skills(settings.skills_dir)
    print(f"✓ Installed {len(written)} skills into {settings.skills_dir}")
    return 0


def handle_uninstall(settings: Settings) -> int:
    result = uninstall_mcp_server(settings.claude_config_path)
    print(f"✓ {result.message}" if result.success else result.message)

    removed = uninstall_skills(settings.skills_dir)
    if removed:
        print(f"✓ Removed skills: {', '.join(removed)}")
    return 0 if result.success else 1


def main(argv=None, settings: Settings = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    argv = [COMMAND_ALIASES.get(arg, arg) for arg in argv]
    args = build_parser().parse_args(argv)

    settings = settings or Settings.from_env()
    configure_logging(settings)

    if args.command == "install":
        return handle_install(settings)
    if args.command == "uninstall":
        return handle_uninstall(settings)
    if args.command == "http":
        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return 0

    run_mcp_server(settings)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
