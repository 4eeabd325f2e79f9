#!/usr/bin/env python3
"""
Demo seed script — populates a running server with a sample portfolio.

!! NOT FOR PRODUCTION !!
This script registers a demo owner with a known password. It is intended
ONLY for local demos and client development.

Usage:
    # With the API server running on localhost:5000:
    python demo/seed.py

    # Delete the SQLite file first (restart the server afterwards so the
    # tables are recreated), then seed:
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000

Login credentials after seeding:
    ┌──────────────────────────────┬───────────────────┐
    │ Email                        │ Password          │
    ├──────────────────────────────┼───────────────────┤
    │ demo@portfolio.dev           │ PortfolioDemo1!   │
    └──────────────────────────────┴───────────────────┘
"""

import argparse
import asyncio
import os
import sys

import httpx

BASE_URL = "http://localhost:5000"
DEFAULT_DB_PATH = os.path.join("data", "portfolio.db")

# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

OWNER = {
    "name": "Demo Owner",
    "email": "demo@portfolio.dev",
    "password": "PortfolioDemo1!",
}

PROJECTS = [
    {
        "title": "Portfolio API",
        "description": "REST API behind this portfolio site",
        "technologies": ["Python", "FastAPI", "SQLAlchemy"],
        "status": "Completed",
        "featured": True,
        "startDate": "2024-01",
        "endDate": "2024-04",
        "githubUrl": "https://github.com/example/portfolio-api",
    },
    {
        "title": "Recipe Recommender",
        "description": "Suggests recipes from what is left in the fridge",
        "technologies": ["Python", "PyTorch", "React"],
        "status": "In Progress",
        "featured": True,
        "startDate": "2024-06",
        "teamSize": 3,
        "body1": "Started as a weekend hack.",
    },
    {
        "title": "Home Lab",
        "description": "Self-hosted services on a small cluster",
        "technologies": ["Docker", "Kubernetes"],
        "status": "On Hold",
        "startDate": "2023-03",
    },
    {
        "title": "Trail Map",
        "description": "Offline hiking map for mobile",
        "technologies": ["TypeScript", "React Native"],
        "status": "Planning",
        "startDate": "2025-01",
    },
]

SKILLS = [
    ("Python", "Languages"),
    ("TypeScript", "Languages"),
    ("React", "Frontend"),
    ("Tailwind CSS", "Frontend"),
    ("FastAPI", "Backend"),
    ("PostgreSQL", "Backend"),
    ("PyTorch", "AI/ML"),
    ("Docker", "DevOps & Tools"),
    ("GitHub Actions", "DevOps & Tools"),
    ("Figma", "Additional Tools"),
]

GOALS = [
    {"title": "Publish the recommender", "description": "Finish the model and ship a demo"},
    {"title": "Write two blog posts"},
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def log(msg: str) -> None:
    print(f"  {msg}")


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register_or_login(client: httpx.AsyncClient, user: dict) -> str:
    """Register the owner, or log in if they already exist. Returns a JWT."""
    resp = await client.post(f"{BASE_URL}/api/users", json=user)
    if resp.status_code == 400 and resp.json().get("message") == "User already exists":
        resp = await client.post(
            f"{BASE_URL}/api/users/login",
            json={"email": user["email"], "password": user["password"]},
        )
    resp.raise_for_status()
    return resp.json()["token"]


async def create_project(client: httpx.AsyncClient, token: str, project: dict) -> dict:
    resp = await client.post(f"{BASE_URL}/api/projects", json=project, headers=auth_header(token))
    resp.raise_for_status()
    return resp.json()


async def add_skill(client: httpx.AsyncClient, token: str, name: str, category: str) -> bool:
    """Add a skill. Returns False if it already exists."""
    resp = await client.post(
        f"{BASE_URL}/api/skills",
        json={"name": name, "category": category},
        headers=auth_header(token),
    )
    if resp.status_code == 400:
        return False
    resp.raise_for_status()
    return True


async def create_goal(client: httpx.AsyncClient, token: str, goal: dict) -> dict:
    resp = await client.post(f"{BASE_URL}/api/goals", json=goal, headers=auth_header(token))
    resp.raise_for_status()
    return resp.json()


def reset_database(db_path: str) -> None:
    if os.path.exists(db_path):
        os.remove(db_path)
        log(f"Deleted {db_path}")
    else:
        log(f"No database at {db_path}")


# ---------------------------------------------------------------------------
# Seed logic
# ---------------------------------------------------------------------------

async def seed(base_url: str) -> None:
    global BASE_URL
    BASE_URL = base_url

    print("\n========================================")
    print("  DEMO SEED — NOT FOR PRODUCTION")
    print("========================================\n")

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            health = await client.get(f"{BASE_URL}/health")
            health.raise_for_status()
        except (httpx.ConnectError, httpx.HTTPStatusError):
            print(f"  ERROR: Cannot connect to {BASE_URL}")
            print("  Start the server first: portfolio-api\n")
            sys.exit(1)

        print("Creating owner...")
        token = await register_or_login(client, OWNER)
        log(f"Login: {OWNER['email']} / {OWNER['password']}")

        print("\nCreating projects...")
        for project in PROJECTS:
            created = await create_project(client, token, project)
            marker = " (featured)" if created["featured"] else ""
            log(f"{created['title']} [{created['status']}]{marker}")

        print("\nAdding skills...")
        for name, category in SKILLS:
            if await add_skill(client, token, name, category):
                log(f"{category}: {name}")
            else:
                log(f"{category}: {name} already exists, skipped")

        print("\nCreating goals...")
        for goal in GOALS:
            created = await create_goal(client, token, goal)
            log(created["title"])

    print("\nDone.\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Portfolio API with demo data")
    parser.add_argument("--base-url", default=BASE_URL, help=f"API server URL (default: {BASE_URL})")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete the SQLite database file before seeding",
    )
    parser.add_argument("--db-path", default=DEFAULT_DB_PATH, help="SQLite file removed by --reset")
    args = parser.parse_args()

    if args.reset:
        print("Resetting database...")
        reset_database(args.db_path)

    asyncio.run(seed(args.base_url))


if __name__ == "__main__":
    main()
