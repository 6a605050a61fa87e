from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from fastapi import Request


class LinkGenerator(Protocol):
    def __call__(
        self,
        route_name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> str: ...


def request_link_generator(request: Request) -> LinkGenerator:
    """Absolute links to named routes, rooted at the current request's base URL."""

    def generate(
        route_name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> str:
        url = request.url_for(route_name, **{key: str(value) for key, value in (path_params or {}).items()})
        if query_params:
            url = url.include_query_params(**query_params)
        return str(url)

    return generate
