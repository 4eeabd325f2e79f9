"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows every table
before create_all() runs, and other modules can import from
portfolio.models directly.
"""

from portfolio.models.user import User  # noqa: F401
from portfolio.models.project import Project, ProjectStatus  # noqa: F401
from portfolio.models.skill import Skill, SkillCategory  # noqa: F401
from portfolio.models.goal import Goal  # noqa: F401
