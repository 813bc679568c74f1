"""Endpoint descriptors and record types for individual API resources.

Each module exposes frozen record dataclasses and functions returning
`Endpoint` descriptors; pass them to `DigitalOceanClient.send` or
`DigitalOceanClient.paginate`.
"""

from digitalocean_client.resources import domains, droplets, floating_ips, images, regions, sizes, tags, volumes
from digitalocean_client.resources.domains import DomainRecord
from digitalocean_client.resources.droplets import Droplet
from digitalocean_client.resources.floating_ips import FloatingIp
from digitalocean_client.resources.images import Image
from digitalocean_client.resources.regions import Region
from digitalocean_client.resources.sizes import Size
from digitalocean_client.resources.tags import Tag
from digitalocean_client.resources.volumes import Snapshot, Volume

__all__ = [
    "DomainRecord",
    "Droplet",
    "FloatingIp",
    "Image",
    "Region",
    "Size",
    "Snapshot",
    "Tag",
    "Volume",
    "domains",
    "droplets",
    "floating_ips",
    "images",
    "regions",
    "sizes",
    "tags",
    "volumes",
]
