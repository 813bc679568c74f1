"""Droplet sizes: the hardware plans a Droplet can be created with."""

from dataclasses import dataclass

from digitalocean_client.request import Endpoint


@dataclass(frozen=True)
class Size:
    """A Droplet plan.

    Prices are in US dollars, memory in MB, disk in GB, transfer in TB.
    """

    slug: str
    memory: int
    vcpus: int
    disk: int
    transfer: float
    price_monthly: float
    price_hourly: float
    regions: tuple[str, ...] = ()
    available: bool = True
    description: str | None = None


def list_sizes() -> Endpoint[Size]:
    return Endpoint("GET", "sizes", key="sizes", record=Size)
