"""
Resource views: the list state behind each screen of the portfolio.

Each view fetches on load() and keeps its own items, loading flag and
error string. Mutations patch the local list instead of refetching:

  - create prepends the new item
  - update replaces the item with the same _id in place
  - delete filters the item out

Errors are stored on the view as displayable strings and never raised;
retry() repeats the last load.
"""

from dataclasses import asdict, dataclass

import httpx

from portfolio_client.api import APIError, PortfolioAPI, handle_api_error

# Display order of the landing page's skill groups
SKILL_CATEGORIES = [
    "Languages",
    "Frontend",
    "Backend",
    "AI/ML",
    "DevOps & Tools",
    "Additional Tools",
]

_CLIENT_ERRORS = (APIError, httpx.HTTPError)


class ResourceView:
    """Shared list state. Subclasses implement _fetch()."""

    def __init__(self, api: PortfolioAPI):
        self.api = api
        self.items: list[dict] = []
        self.loading = False
        self.error: str | None = None

    async def _fetch(self) -> list[dict]:
        raise NotImplementedError

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.items = await self._fetch()
        except _CLIENT_ERRORS as exc:
            self.error = handle_api_error(exc)
        finally:
            self.loading = False

    async def retry(self) -> None:
        await self.load()

    async def _create(self, call) -> dict | None:
        try:
            item = await call
        except _CLIENT_ERRORS as exc:
            self.error = handle_api_error(exc)
            return None
        self.error = None
        self.items = [item] + self.items
        return item

    async def _update(self, call) -> dict | None:
        try:
            item = await call
        except _CLIENT_ERRORS as exc:
            self.error = handle_api_error(exc)
            return None
        self.error = None
        self.items = [item if existing["_id"] == item["_id"] else existing for existing in self.items]
        return item

    async def _delete(self, call) -> bool:
        try:
            result = await call
        except _CLIENT_ERRORS as exc:
            self.error = handle_api_error(exc)
            return False
        self.error = None
        self.items = [existing for existing in self.items if existing["_id"] != result["id"]]
        return True


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@dataclass
class ProjectFilterState:
    """Dashboard filter controls. Empty values are left out of the query."""

    search: str = ""
    status: str = ""
    technologies: str = ""
    start_date: str = ""
    end_date: str = ""
    sort_by: str = "startDate"
    sort_order: str = "desc"

    def to_params(self) -> dict:
        params = {
            "search": self.search,
            "status": self.status,
            "technologies": self.technologies,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }
        return {key: str(value) for key, value in params.items() if value not in (None, "")}


class ProjectsView(ResourceView):
    def __init__(self, api: PortfolioAPI, filters: ProjectFilterState | None = None):
        super().__init__(api)
        self.filters = filters or ProjectFilterState()

    async def _fetch(self) -> list[dict]:
        return await self.api.projects.get_filtered(self.filters.to_params())

    async def set_filters(self, **changes) -> None:
        """Change some filters and reload."""
        self.filters = ProjectFilterState(**{**asdict(self.filters), **changes})
        await self.load()

    async def clear_filters(self) -> None:
        self.filters = ProjectFilterState()
        await self.load()

    async def create(self, data: dict) -> dict | None:
        return await self._create(self.api.projects.create(data))

    async def update(self, project_id: str, data: dict) -> dict | None:
        return await self._update(self.api.projects.update(project_id, data))

    async def delete(self, project_id: str) -> bool:
        return await self._delete(self.api.projects.delete(project_id))


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

def group_skills(skills: list[dict]) -> dict[str, list[dict]]:
    """Group skills by category, known categories first in display order."""
    grouped: dict[str, list[dict]] = {}
    for skill in skills:
        grouped.setdefault(skill["category"], []).append(skill)
    ordered = {category: grouped.pop(category) for category in SKILL_CATEGORIES if category in grouped}
    ordered.update(grouped)
    return ordered


class SkillsView(ResourceView):
    """Skills list; mine=True limits it to the logged-in user's skills."""

    def __init__(self, api: PortfolioAPI, mine: bool = False):
        super().__init__(api)
        self.mine = mine

    async def _fetch(self) -> list[dict]:
        if self.mine:
            return await self.api.skills.get_mine()
        return await self.api.skills.get_all()

    @property
    def grouped(self) -> dict[str, list[dict]]:
        return group_skills(self.items)

    async def add(self, data: dict) -> dict | None:
        return await self._create(self.api.skills.add(data))

    async def update(self, skill_id: str, data: dict) -> dict | None:
        return await self._update(self.api.skills.update(skill_id, data))

    async def delete(self, skill_id: str) -> bool:
        return await self._delete(self.api.skills.delete(skill_id))


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class GoalsView(ResourceView):
    async def _fetch(self) -> list[dict]:
        return await self.api.goals.get_all()

    async def create(self, data: dict) -> dict | None:
        return await self._create(self.api.goals.create(data))

    async def update(self, goal_id: str, data: dict) -> dict | None:
        return await self._update(self.api.goals.update(goal_id, data))

    async def delete(self, goal_id: str) -> bool:
        return await self._delete(self.api.goals.delete(goal_id))


# ---------------------------------------------------------------------------
# Landing page
# ---------------------------------------------------------------------------

class LandingView(ResourceView):
    """Featured projects (items) plus every skill, grouped by category."""

    def __init__(self, api: PortfolioAPI):
        super().__init__(api)
        self.skills: list[dict] = []

    async def _fetch(self) -> list[dict]:
        featured = await self.api.projects.get_featured()
        self.skills = await self.api.skills.get_all()
        return featured

    @property
    def grouped_skills(self) -> dict[str, list[dict]]:
        return group_skills(self.skills)
