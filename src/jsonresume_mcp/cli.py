from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from jsonresume_mcp.config import ConfigError, Settings
from jsonresume_mcp.tools import ToolContext, call_tool

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# subcommand -> tool it runs
COMMAND_TOOLS = {
    "analyze": "analyze_codebase",
    "check": "check_resume",
    "enhance-project": "enhance_resume_with_project",
    "enhance-job": "enhance_resume",
}


def configure_logging(level: str) -> None:
    """Send all logging to stderr; stdout is reserved for results and the MCP protocol."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonresume-mcp",
        description="Keep a GitHub-gist JSON Resume in sync with the projects you work on.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Run the MCP server over stdio (default)")

    http = sub.add_parser("http", help="Run the HTTP API")
    http.add_argument("--host", default="127.0.0.1")
    http.add_argument("--port", type=int, default=8000)

    analyze = sub.add_parser("analyze", help="Analyze a codebase and print the result")
    analyze.add_argument("directory", nargs="?", default=None)

    sub.add_parser("check", help="Check whether the user has a resume")

    project = sub.add_parser("enhance-project", help="Add a project to the resume")
    project.add_argument("directory", nargs="?", default=None)

    job = sub.add_parser("enhance-job", help="Tailor the resume to a job description file")
    job.add_argument("job_json_path")
    return parser


def _tool_arguments(args: argparse.Namespace) -> dict[str, Any]:
    if args.command in ("analyze", "enhance-project"):
        return {"directory": args.directory}
    if args.command == "enhance-job":
        return {"job_json_path": args.job_json_path}
    return {}


def _run_http(ctx: ToolContext, host: str, port: int) -> int:
    import uvicorn

    from jsonresume_mcp.api.main import create_app

    uvicorn.run(create_app(ctx), host=host, port=port, log_config=None)
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the requested command.

    Returns:
        Exit code (0 for success, 1 for configuration or tool failure).
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    command = args.command or "serve"

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    ctx = ToolContext.from_settings(settings)

    if command == "serve":
        from jsonresume_mcp.server import run_stdio

        run_stdio(ctx)
        return 0

    try:
        if command == "http":
            return _run_http(ctx, args.host, args.port)
        result = call_tool(ctx, COMMAND_TOOLS[command], _tool_arguments(args))
    finally:
        ctx.close()

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 1 if result.get("isError") else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
