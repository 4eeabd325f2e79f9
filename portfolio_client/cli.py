#!/usr/bin/env python3
"""
portfolio-cli — a terminal front end for the Portfolio API.

Usage:
    portfolio-cli landing
    portfolio-cli register --name "Ada" --email ada@example.com
    portfolio-cli login --email ada@example.com
    portfolio-cli projects list --status "In Progress" --sort-by title --sort-order asc
    portfolio-cli projects add --title API --description "REST API" --start-date 2024-01
    portfolio-cli skills add --name React --category Frontend
    portfolio-cli goals add --title "Ship v2"
    portfolio-cli logout

The server URL comes from --base-url or PORTFOLIO_API_URL
(default http://localhost:5000). The token is kept in --storage
(default ~/.portfolio/storage.json) between invocations.

Exits non-zero when the server rejects a request.
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys

import httpx

from portfolio_client.api import APIError, PortfolioAPI, handle_api_error
from portfolio_client.auth import AuthContext
from portfolio_client.storage import TokenStore
from portfolio_client.views import (
    SKILL_CATEGORIES,
    GoalsView,
    LandingView,
    ProjectFilterState,
    ProjectsView,
    SkillsView,
)

DEFAULT_BASE_URL = "http://localhost:5000"
PROJECT_STATUSES = ["Planning", "In Progress", "Completed", "On Hold"]


class CommandError(Exception):
    """A failure to report to the user and exit non-zero."""


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def print_table(rows: list[dict], columns: list[tuple[str, str]]) -> None:
    if not rows:
        print("  (none)")
        return
    widths = [
        max(len(header), *(len(str(row.get(key) or "")) for row in rows))
        for key, header in columns
    ]
    print("  " + "  ".join(header.ljust(width) for (_, header), width in zip(columns, widths)))
    print("  " + "  ".join("-" * width for width in widths))
    for row in rows:
        cells = [str(row.get(key) or "") for key, _ in columns]
        print("  " + "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)))


def _project_rows(projects: list[dict]) -> list[dict]:
    return [
        {**project, "technologies": ", ".join(project.get("technologies") or []),
         "featured": "yes" if project.get("featured") else ""}
        for project in projects
    ]


PROJECT_COLUMNS = [
    ("_id", "ID"),
    ("title", "Title"),
    ("status", "Status"),
    ("startDate", "Start"),
    ("endDate", "End"),
    ("technologies", "Technologies"),
    ("featured", "Featured"),
]
SKILL_COLUMNS = [("_id", "ID"), ("name", "Name"), ("category", "Category")]
GOAL_COLUMNS = [("_id", "ID"), ("title", "Title"), ("description", "Description")]


def _check(view) -> None:
    if view.error:
        raise CommandError(view.error)


def _project_payload(args) -> dict:
    fields = {
        "title": args.title,
        "description": args.description,
        "startDate": args.start_date,
        "endDate": args.end_date,
        "status": args.status,
        "githubUrl": args.github_url,
        "demoUrl": args.demo_url,
        "teamSize": args.team_size,
        "featured": args.featured,
    }
    payload = {key: value for key, value in fields.items() if value is not None}
    if args.technologies is not None:
        payload["technologies"] = [t.strip() for t in args.technologies.split(",") if t.strip()]
    return payload


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def cmd_landing(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = LandingView(api)
    await view.load()
    _check(view)
    print("Featured projects")
    print_table(_project_rows(view.items), PROJECT_COLUMNS[1:])
    print("\nSkills")
    for category, skills in view.grouped_skills.items():
        print(f"  {category}: {', '.join(skill['name'] for skill in skills)}")


async def cmd_register(args, api: PortfolioAPI, auth: AuthContext) -> None:
    password = args.password or getpass.getpass("Password: ")
    user = await auth.register(args.name, args.email, password)
    print(f"Registered and logged in as {user['name']} <{user['email']}>")


async def cmd_login(args, api: PortfolioAPI, auth: AuthContext) -> None:
    password = args.password or getpass.getpass("Password: ")
    user = await auth.login(args.email, password)
    print(f"Logged in as {user['name']} <{user['email']}>")


async def cmd_logout(args, api: PortfolioAPI, auth: AuthContext) -> None:
    auth.logout()
    print("Logged out")


async def cmd_whoami(args, api: PortfolioAPI, auth: AuthContext) -> None:
    user = await auth.initialize()
    if user is None:
        raise CommandError("Not logged in")
    print(f"{user['name']} <{user['email']}> ({user['id']})")


async def cmd_change_password(args, api: PortfolioAPI, auth: AuthContext) -> None:
    current = args.current or getpass.getpass("Current password: ")
    new = args.new or getpass.getpass("New password: ")
    result = await api.users.change_password(current, new)
    print(result["message"])


async def cmd_projects_list(args, api: PortfolioAPI, auth: AuthContext) -> None:
    filters = ProjectFilterState(
        search=args.search or "",
        status=args.status or "",
        technologies=args.technologies or "",
        start_date=str(args.start_year) if args.start_year else "",
        end_date=str(args.end_year) if args.end_year else "",
        sort_by=args.sort_by,
        sort_order=args.sort_order,
    )
    view = ProjectsView(api, filters)
    await view.load()
    _check(view)
    print_table(_project_rows(view.items), PROJECT_COLUMNS)


async def cmd_projects_add(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = ProjectsView(api)
    project = await view.create(_project_payload(args))
    _check(view)
    print(f"Created project {project['_id']}")


async def cmd_projects_update(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = ProjectsView(api)
    project = await view.update(args.id, _project_payload(args))
    _check(view)
    print(f"Updated project {project['_id']}")


async def cmd_projects_delete(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = ProjectsView(api)
    await view.delete(args.id)
    _check(view)
    print(f"Deleted project {args.id}")


async def cmd_skills_list(args, api: PortfolioAPI, auth: AuthContext) -> None:
    if args.category:
        skills = await api.skills.get_by_category(args.category)
        print_table(skills, SKILL_COLUMNS)
        return
    view = SkillsView(api)
    await view.load()
    _check(view)
    for category, skills in view.grouped.items():
        print(category)
        print_table(skills, SKILL_COLUMNS)


async def cmd_skills_mine(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = SkillsView(api, mine=True)
    await view.load()
    _check(view)
    print_table(view.items, SKILL_COLUMNS)


async def cmd_skills_add(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = SkillsView(api, mine=True)
    skill = await view.add({"name": args.name, "category": args.category})
    _check(view)
    print(f"Added skill {skill['_id']}")


async def cmd_skills_update(args, api: PortfolioAPI, auth: AuthContext) -> None:
    data = {key: value for key, value in (("name", args.name), ("category", args.category)) if value}
    view = SkillsView(api, mine=True)
    skill = await view.update(args.id, data)
    _check(view)
    print(f"Updated skill {skill['_id']}")


async def cmd_skills_delete(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = SkillsView(api, mine=True)
    await view.delete(args.id)
    _check(view)
    print(f"Deleted skill {args.id}")


async def cmd_goals_list(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = GoalsView(api)
    await view.load()
    _check(view)
    print_table(view.items, GOAL_COLUMNS)


async def cmd_goals_add(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = GoalsView(api)
    goal = await view.create({"title": args.title, "description": args.description or ""})
    _check(view)
    print(f"Created goal {goal['_id']}")


async def cmd_goals_update(args, api: PortfolioAPI, auth: AuthContext) -> None:
    data = {key: value for key, value in (("title", args.title), ("description", args.description))
            if value is not None}
    view = GoalsView(api)
    goal = await view.update(args.id, data)
    _check(view)
    print(f"Updated goal {goal['_id']}")


async def cmd_goals_delete(args, api: PortfolioAPI, auth: AuthContext) -> None:
    view = GoalsView(api)
    await view.delete(args.id)
    _check(view)
    print(f"Deleted goal {args.id}")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_project_fields(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--title", required=required)
    parser.add_argument("--description", required=required)
    parser.add_argument("--start-date", required=required, help="YYYY-MM or YYYY-MM-DD")
    parser.add_argument("--end-date", help="YYYY-MM or YYYY-MM-DD")
    parser.add_argument("--technologies", help="Comma-separated list")
    parser.add_argument("--status", choices=PROJECT_STATUSES)
    parser.add_argument("--github-url")
    parser.add_argument("--demo-url")
    parser.add_argument("--team-size", type=int)
    parser.add_argument(
        "--featured",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show on the landing page",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio-cli", description="Portfolio API client")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("PORTFOLIO_API_URL", DEFAULT_BASE_URL),
        help=f"API server URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument("--storage", help="Token storage file (default: ~/.portfolio/storage.json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log HTTP failures")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("landing", help="Show featured projects and skills").set_defaults(handler=cmd_landing)

    register = commands.add_parser("register", help="Create an account")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password")
    register.set_defaults(handler=cmd_register)

    login = commands.add_parser("login", help="Log in and store the token")
    login.add_argument("--email", required=True)
    login.add_argument("--password")
    login.set_defaults(handler=cmd_login)

    commands.add_parser("logout", help="Forget the stored token").set_defaults(handler=cmd_logout)
    commands.add_parser("whoami", help="Show the logged-in user").set_defaults(handler=cmd_whoami)

    change = commands.add_parser("change-password", help="Change your password")
    change.add_argument("--current")
    change.add_argument("--new")
    change.set_defaults(handler=cmd_change_password)

    # --- projects ---
    projects = commands.add_parser("projects", help="Manage your projects")
    project_commands = projects.add_subparsers(dest="action", required=True)

    listing = project_commands.add_parser("list")
    listing.add_argument("--search")
    listing.add_argument("--status", choices=PROJECT_STATUSES)
    listing.add_argument("--technologies", help="Comma-separated list (any match)")
    listing.add_argument("--start-year", type=int)
    listing.add_argument("--end-year", type=int)
    listing.add_argument(
        "--sort-by",
        default="startDate",
        choices=["title", "status", "startDate", "endDate", "createdAt", "updatedAt"],
    )
    listing.add_argument("--sort-order", default="desc", choices=["asc", "desc"])
    listing.set_defaults(handler=cmd_projects_list)

    add = project_commands.add_parser("add")
    _add_project_fields(add, required=True)
    add.set_defaults(handler=cmd_projects_add)

    update = project_commands.add_parser("update")
    update.add_argument("id")
    _add_project_fields(update, required=False)
    update.set_defaults(handler=cmd_projects_update)

    delete = project_commands.add_parser("delete")
    delete.add_argument("id")
    delete.set_defaults(handler=cmd_projects_delete)

    # --- skills ---
    skills = commands.add_parser("skills", help="Browse and manage skills")
    skill_commands = skills.add_subparsers(dest="action", required=True)

    listing = skill_commands.add_parser("list")
    listing.add_argument("--category", choices=SKILL_CATEGORIES)
    listing.set_defaults(handler=cmd_skills_list)

    skill_commands.add_parser("mine").set_defaults(handler=cmd_skills_mine)

    add = skill_commands.add_parser("add")
    add.add_argument("--name", required=True)
    add.add_argument("--category", required=True, choices=SKILL_CATEGORIES)
    add.set_defaults(handler=cmd_skills_add)

    update = skill_commands.add_parser("update")
    update.add_argument("id")
    update.add_argument("--name")
    update.add_argument("--category", choices=SKILL_CATEGORIES)
    update.set_defaults(handler=cmd_skills_update)

    delete = skill_commands.add_parser("delete")
    delete.add_argument("id")
    delete.set_defaults(handler=cmd_skills_delete)

    # --- goals ---
    goals = commands.add_parser("goals", help="Manage your goals")
    goal_commands = goals.add_subparsers(dest="action", required=True)

    goal_commands.add_parser("list").set_defaults(handler=cmd_goals_list)

    add = goal_commands.add_parser("add")
    add.add_argument("--title", required=True)
    add.add_argument("--description")
    add.set_defaults(handler=cmd_goals_add)

    update = goal_commands.add_parser("update")
    update.add_argument("id")
    update.add_argument("--title")
    update.add_argument("--description")
    update.set_defaults(handler=cmd_goals_update)

    delete = goal_commands.add_parser("delete")
    delete.add_argument("id")
    delete.set_defaults(handler=cmd_goals_delete)

    return parser


async def run_command(args: argparse.Namespace, api: PortfolioAPI, store: TokenStore) -> int:
    """Run the parsed command. Returns the process exit code."""
    auth = AuthContext(api, store)
    try:
        await args.handler(args, api, auth)
    except CommandError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (APIError, httpx.HTTPError) as exc:
        print(f"Error: {handle_api_error(exc)}", file=sys.stderr)
        return 1
    return 0


async def _main(args: argparse.Namespace) -> int:
    store = TokenStore(args.storage)
    async with PortfolioAPI(args.base_url, store) as api:
        return await run_command(args, api, store)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
