"""Regions: the datacenters Droplets and volumes live in.

https://docs.digitalocean.com/reference/api/api-reference/#tag/Regions
"""

from dataclasses import dataclass

from digitalocean_client.request import Endpoint


@dataclass(frozen=True)
class Region:
    """A datacenter location.

    Attributes:
        slug: Unique identifier, e.g. ``nyc3``.
        name: Display name, e.g. ``New York 3``.
        sizes: Size slugs that can be created here.
        available: Whether new Droplets can be created here.
        features: Features available in the region.
    """

    slug: str
    name: str
    sizes: tuple[str, ...] = ()
    available: bool = False
    features: tuple[str, ...] = ()


def list_regions() -> Endpoint[Region]:
    return Endpoint("GET", "regions", key="regions", record=Region)
