"""Narrow a batch of review units down to duplicated dependency bumps.

Dependabot opens one PR per package per manifest, so the same package can
show up several times in a repository (e.g. once per go.mod or
package.json). Only those groups are interesting here.
"""

from ghdep_core.paths import configure_logger
from ghdep_core.units import ReviewUnit, package_name

_log = configure_logger("ghdep.dupefilter")


def group_by_package(units: list[ReviewUnit]) -> dict[tuple[str, str], list[ReviewUnit]]:
    """Group units by (package, repository).

    Units whose title names no package are skipped with a warning.
    """
    groups: dict[tuple[str, str], list[ReviewUnit]] = {}
    for unit in units:
        package = package_name(unit.title)
        if package is None:
            _log.warning("Failed to find package info for %s", unit.title)
            continue
        groups.setdefault((package, unit.repository), []).append(unit)
    return groups


def filter_duplicate_units(units: list[ReviewUnit]) -> list[ReviewUnit]:
    """Return only the units whose (package, repository) group has 2+ members.

    Groups come out ordered by repository then package; members keep their
    input order.
    """
    groups = group_by_package(units)
    result: list[ReviewUnit] = []
    for (package, repository) in sorted(groups, key=lambda k: (k[1], k[0])):
        members = groups[(package, repository)]
        if len(members) > 1:
            result.extend(members)
    _log.info("duplicate filter: %d of %d units kept", len(result), len(units))
    return result
