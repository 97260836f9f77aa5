"""Search for open Dependabot pull requests, one GraphQL page at a time."""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ghdep_core import gh_ops
from ghdep_core.paths import configure_logger
from ghdep_core.units import ReviewUnit

_log = configure_logger("ghdep.query")

PAGE_SIZE = 100

SEARCH_QUERY = """
query($searchQuery: String!, $first: Int!, $cursor: String) {
  search(query: $searchQuery, type: ISSUE, first: $first, after: $cursor) {
    issueCount
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      ... on PullRequest {
        number
        title
        url
        updatedAt
        repository {
          nameWithOwner
        }
      }
    }
  }
}
"""


@dataclass
class SearchQuery:
    """Which pull requests to list.

    A team scope wins over an org scope; with neither, the user's own
    repositories are searched.
    """

    username: str
    org: str = ""
    team: str = ""
    cursor: Optional[str] = None

    def scope(self) -> str:
        if self.team:
            return f"team-review-requested:{self.team}"
        if self.org:
            return f"org:{self.org}"
        return f"user:{self.username}"

    def search_string(self) -> str:
        return " ".join([
            "is:pr",
            "is:open",
            "archived:false",
            "author:app/dependabot",
            self.scope(),
        ])

    def filter_label(self) -> str:
        if self.team:
            return f"team:{self.team}"
        if self.org:
            return f"org:{self.org}"
        return f"user:{self.username}"

    def next_page(self, cursor: Optional[str]) -> "SearchQuery":
        return SearchQuery(self.username, self.org, self.team, cursor)


@dataclass
class Page:
    units: list[ReviewUnit] = field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None
    total_count: int = 0


def load_page(query: SearchQuery) -> Page:
    """Fetch one page of search results."""
    data = gh_ops.graphql(
        SEARCH_QUERY,
        searchQuery=query.search_string(),
        first=PAGE_SIZE,
        cursor=query.cursor,
    )
    search = data["search"]
    # Non-PR nodes come back as empty objects from the inline fragment
    units = [ReviewUnit.from_node(node) for node in search["nodes"] if node]
    page_info = search["pageInfo"]
    _log.debug("loaded page: %d units, has_next=%s",
               len(units), page_info["hasNextPage"])
    return Page(
        units=units,
        has_next_page=page_info["hasNextPage"],
        end_cursor=page_info.get("endCursor"),
        total_count=search.get("issueCount", 0),
    )


def load_all(
    query: SearchQuery,
    progress: Optional[Callable[[int, int], None]] = None,
) -> list[ReviewUnit]:
    """Fetch every page for *query* and return all units.

    ``progress(loaded, total)`` is called before each follow-up page.
    Errors propagate; a partial list is never returned.
    """
    page = load_page(query)
    units = list(page.units)
    while page.has_next_page:
        if progress:
            progress(len(units), page.total_count)
        page = load_page(query.next_page(page.end_cursor))
        units.extend(page.units)
    _log.info("search %r returned %d units", query.search_string(), len(units))
    return units
