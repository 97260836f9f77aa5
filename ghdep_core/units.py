"""Review unit records built from GitHub search results."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

# "Bump lodash from 4.17.20 to 4.17.21" -> "lodash"
PACKAGE_PATTERN = re.compile(r"[bB]ump ([A-Za-z0-9@/-]+)")


def package_name(title: str) -> Optional[str]:
    """Return the package a Dependabot title bumps, or None if it names none."""
    match = PACKAGE_PATTERN.search(title)
    if match:
        return match.group(1)
    return None


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp ("2024-01-02T03:04:05Z")."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ReviewUnit:
    """A single open pull request, as returned by one fetch."""

    repository: str
    number: str
    title: str
    url: str
    updated_at: datetime

    @property
    def operation_key(self) -> str:
        return f"{self.repository}/{self.number}"

    @property
    def package_hint(self) -> Optional[str]:
        return package_name(self.title)

    @property
    def checkout_command(self) -> str:
        return f"gh pr checkout {self.number} --repo {self.repository}"

    @classmethod
    def from_node(cls, node: dict) -> "ReviewUnit":
        """Build a unit from a GraphQL ``PullRequest`` search node."""
        return cls(
            repository=node["repository"]["nameWithOwner"],
            number=str(node["number"]),
            title=node["title"],
            url=node["url"],
            updated_at=parse_timestamp(node["updatedAt"]),
        )


def sort_by_updated(units: list[ReviewUnit]) -> list[ReviewUnit]:
    """Oldest update first."""
    return sorted(units, key=lambda u: u.updated_at)
