"""Floating IPs: static public addresses that can move between Droplets."""

from dataclasses import dataclass

from digitalocean_client.request import Endpoint
from digitalocean_client.resources.droplets import Droplet
from digitalocean_client.resources.regions import Region


@dataclass(frozen=True)
class FloatingIp:
    """A reserved public IP; `droplet` is None while unassigned."""

    ip: str
    region: Region
    droplet: Droplet | None = None
    locked: bool = False


def list_floating_ips() -> Endpoint[FloatingIp]:
    return Endpoint("GET", "floating_ips", key="floating_ips", record=FloatingIp)


def assign_new_floating_ip(droplet_id: int) -> Endpoint[FloatingIp]:
    """Reserve a floating IP and assign it to a Droplet."""
    return Endpoint("POST", "floating_ips", body={"droplet_id": droplet_id}, key="floating_ip", record=FloatingIp)


def reserve_floating_ip(region: str) -> Endpoint[FloatingIp]:
    """Reserve an unassigned floating IP in a region."""
    return Endpoint("POST", "floating_ips", body={"region": region}, key="floating_ip", record=FloatingIp)


def get_floating_ip(ip: str) -> Endpoint[FloatingIp]:
    return Endpoint("GET", "floating_ips/{ip}", path_params=(("ip", ip),), key="floating_ip", record=FloatingIp)


def delete_floating_ip(ip: str) -> Endpoint[None]:
    return Endpoint("DELETE", "floating_ips/{ip}", path_params=(("ip", ip),))
