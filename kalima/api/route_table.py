"""
Declarative table of the public URL surface.

Patterns are matched against the language-less path. `localized` routes
also accept a /:lang prefix, as do gated ones; `capability` names what the
caller must hold.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Capability(str, Enum):
    AUTHENTICATED = "authenticated"


class RouteEntry(BaseModel):
    name: str
    pattern: str
    capability: Optional[Capability] = None
    localized: bool = True

    model_config = ConfigDict(frozen=True)


class RouteMatch(BaseModel):
    route: RouteEntry
    params: dict[str, str]


ROUTES: tuple[RouteEntry, ...] = (
    RouteEntry(name="home", pattern="/"),
    RouteEntry(name="categories", pattern="/categories"),
    RouteEntry(name="category", pattern="/categories/:cat"),
    RouteEntry(name="subcategory", pattern="/categories/:cat/:sub"),
    RouteEntry(name="category_article", pattern="/categories/:cat/:sub/:slug"),
    RouteEntry(name="article", pattern="/article/:slug"),
    RouteEntry(name="page", pattern="/page/:slug"),
    RouteEntry(name="search", pattern="/search"),
    RouteEntry(name="favorites", pattern="/favorites", capability=Capability.AUTHENTICATED),
    RouteEntry(name="profile", pattern="/profile", capability=Capability.AUTHENTICATED),
    RouteEntry(name="suggestions", pattern="/suggestions", capability=Capability.AUTHENTICATED),
    RouteEntry(name="login", pattern="/login", localized=False),
    RouteEntry(name="register", pattern="/register", localized=False),
    RouteEntry(name="admin", pattern="/admin*", capability=Capability.AUTHENTICATED, localized=False),
)


def _compile(pattern: str) -> re.Pattern:
    if pattern.endswith("*"):
        return re.compile("^" + re.escape(pattern[:-1]) + "(?P<rest>.*)$")
    parts = []
    for segment in pattern.strip("/").split("/"):
        if not segment:
            continue
        if segment.startswith(":"):
            parts.append(f"(?P<{segment[1:]}>[^/]+)")
        else:
            parts.append(re.escape(segment))
    return re.compile("^/" + "/".join(parts) + "/?$")


class RouteTable:
    """Compiled routes, first match wins"""

    def __init__(self, routes: tuple[RouteEntry, ...] = ROUTES):
        self.routes = routes
        self._compiled = [(route, _compile(route.pattern)) for route in routes]

    def match(self, path_without_language: str, language_in_path: bool = False) -> Optional[RouteMatch]:
        path = path_without_language or "/"
        for route, regex in self._compiled:
            # Gated routes also answer under a language prefix
            if language_in_path and not route.localized and route.capability is None:
                continue
            found = regex.match(path)
            if found:
                params = {k: v for k, v in found.groupdict().items() if v is not None}
                return RouteMatch(route=route, params=params)
        return None

    def by_name(self, name: str) -> Optional[RouteEntry]:
        for route in self.routes:
            if route.name == name:
                return route
        return None


def build_route_table() -> RouteTable:
    return RouteTable(ROUTES)
