"""Command-line host for the GitHub tools.

Usage:
    github-tools list                                   # Show registered tools
    github-tools call github_get_repo --params '{"owner": "octocat", "repo": "hello-world"}'
    github-tools call github_list_issues --params '{"owner": "o", "repo": "r"}' --show-quota

Configuration comes from GITHUB_TOKEN, GITHUB_BASE_URL and GITHUB_RATE_LIMIT
(environment or .env).
"""

import argparse
import asyncio
import json
import sys

from .client import GitHubClient
from .errors import ConfigurationError
from .tools import ToolRegistry, describe_tools, register_tools

__all__ = ["main"]


def _print_tools(verbose: bool) -> None:
    for tool in describe_tools():
        print(f"{tool['name']}: {tool['description']}")
        if verbose:
            print(json.dumps(tool["input_schema"], indent=2))


async def run_call(
    client: GitHubClient,
    name: str,
    params: dict,
    show_quota: bool = False,
) -> int:
    """Invoke one tool and print its rendered result.

    Returns:
        Process exit code (1 if the tool reported an error)
    """
    registry = register_tools(ToolRegistry(), client)
    async with client:
        result = await registry.call(name, params)
        print(result.text)
        if show_quota:
            quota = await registry.call("github_get_rate_limit")
            print(f"\nRate limit: {quota.text}", file=sys.stderr)
    return 1 if result.is_error else 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="github-tools",
        description="Call GitHub REST operations as named tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration:
  Set in the environment or .env:
    GITHUB_TOKEN=ghp_your_token_here
    GITHUB_BASE_URL=https://api.github.com   (optional)
    GITHUB_RATE_LIMIT=10                     (optional, requests/second)
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List available tools")
    list_parser.add_argument(
        "--schemas", action="store_true", help="Include each tool's JSON schema"
    )

    call_parser = subparsers.add_parser("call", help="Invoke a tool")
    call_parser.add_argument("name", help="Tool name, e.g. github_get_repo")
    call_parser.add_argument(
        "--params", default="{}", help="Tool parameters as a JSON object"
    )
    call_parser.add_argument(
        "--show-quota",
        action="store_true",
        help="Print the rate limit quota reported by GitHub after the call",
    )

    args = parser.parse_args(argv)

    if args.command == "list":
        _print_tools(args.schemas)
        return 0

    try:
        params = json.loads(args.params)
    except json.JSONDecodeError as e:
        print(f"ERROR: --params is not valid JSON: {e}", file=sys.stderr)
        return 1
    if not isinstance(params, dict):
        print("ERROR: --params must be a JSON object", file=sys.stderr)
        return 1

    try:
        client = GitHubClient()
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return asyncio.run(run_call(client, args.name, params, show_quota=args.show_quota))


if __name__ == "__main__":
    sys.exit(main())
