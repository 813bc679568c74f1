"""Tags: labels applied to resources to group them.

https://docs.digitalocean.com/reference/api/api-reference/#tag/Tags
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from digitalocean_client.request import Endpoint


@dataclass(frozen=True)
class Tag:
    """A tag and statistics about the resources carrying it.

    Attributes:
        name: Letters, numbers, colons, dashes and underscores; at most 255 characters.
        resources: Per resource type counts and last tagged resource.
    """

    name: str
    resources: dict[str, Any] | None = None


def _tag_path(name: str, *rest: str) -> tuple[str, tuple[tuple[str, str], ...]]:
    return "/".join(("tags/{name}", *rest)), (("name", name),)


def _resource_body(resources: Iterable[tuple[str, str]]) -> dict[str, Any]:
    return {
        "resources": [
            {"resource_id": resource_id, "resource_type": resource_type} for resource_id, resource_type in resources
        ]
    }


def create_tag(name: str) -> Endpoint[Tag]:
    return Endpoint("POST", "tags", body={"name": name}, key="tag", record=Tag)


def get_tag(name: str) -> Endpoint[Tag]:
    path, params = _tag_path(name)
    return Endpoint("GET", path, path_params=params, key="tag", record=Tag)


def list_tags() -> Endpoint[Tag]:
    return Endpoint("GET", "tags", key="tags", record=Tag)


def delete_tag(name: str) -> Endpoint[None]:
    path, params = _tag_path(name)
    return Endpoint("DELETE", path, path_params=params)


def tag_resources(name: str, resources: Iterable[tuple[str, str]]) -> Endpoint[None]:
    """Apply a tag to resources given as ``(resource_id, resource_type)`` pairs."""
    path, params = _tag_path(name, "resources")
    return Endpoint("POST", path, path_params=params, body=_resource_body(resources))


def untag_resources(name: str, resources: Iterable[tuple[str, str]]) -> Endpoint[None]:
    """Remove a tag from resources given as ``(resource_id, resource_type)`` pairs."""
    path, params = _tag_path(name, "resources")
    return Endpoint("DELETE", path, path_params=params, body=_resource_body(resources))
