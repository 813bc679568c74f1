"""Droplets.

Only `id` is required: the provider documents the remaining members, but
list responses from older accounts and test fixtures may omit them.

https://docs.digitalocean.com/reference/api/api-reference/#tag/Droplets
"""

from dataclasses import dataclass
from datetime import datetime

from digitalocean_client.request import Endpoint
from digitalocean_client.resources.regions import Region


@dataclass(frozen=True)
class Droplet:
    id: int
    name: str | None = None
    memory: int | None = None
    vcpus: int | None = None
    disk: int | None = None
    locked: bool = False
    status: str | None = None
    created_at: datetime | None = None
    region: Region | None = None
    size_slug: str | None = None
    features: tuple[str, ...] = ()
    volume_ids: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


def list_droplets(tag_name: str | None = None) -> Endpoint[Droplet]:
    """All Droplets, optionally only those carrying `tag_name`."""
    endpoint = Endpoint("GET", "droplets", key="droplets", record=Droplet)
    if tag_name is not None:
        endpoint = endpoint.with_query(tag_name=tag_name)
    return endpoint


def get_droplet(droplet_id: int) -> Endpoint[Droplet]:
    return Endpoint("GET", "droplets/{id}", path_params=(("id", str(droplet_id)),), key="droplet", record=Droplet)


def delete_droplet(droplet_id: int) -> Endpoint[None]:
    return Endpoint("DELETE", "droplets/{id}", path_params=(("id", str(droplet_id)),))


def delete_droplets_by_tag(tag_name: str) -> Endpoint[None]:
    return Endpoint("DELETE", "droplets", query=(("tag_name", tag_name),))
