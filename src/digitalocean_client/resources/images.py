"""Images, including custom images imported from a URL.

A custom image must be a Linux VM image in raw, qcow2, vhdx, vdi or vmdk
format, optionally gzip or bzip2 compressed, under 100 GB uncompressed.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from digitalocean_client.request import Endpoint


@dataclass(frozen=True)
class Image:
    id: int
    name: str
    type: str
    distribution: str
    regions: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    created_at: datetime | None = None
    description: str | None = None
    status: str | None = None
    slug: str | None = None
    public: bool = False
    min_disk_size: int | None = None
    size_gigabytes: float | None = None


def list_images(*, type: str | None = None, private: bool = False) -> Endpoint[Image]:
    """Images, filtered to ``distribution``/``application`` by `type` or to the account's own."""
    endpoint = Endpoint("GET", "images", key="images", record=Image)
    if type is not None:
        endpoint = endpoint.with_query(type=type)
    if private:
        endpoint = endpoint.with_query(private="true")
    return endpoint


def get_image(image_id: int) -> Endpoint[Image]:
    return Endpoint("GET", "images/{id}", path_params=(("id", str(image_id)),), key="image", record=Image)


def create_custom_image(
    name: str,
    url: str,
    region: str,
    *,
    distribution: str | None = None,
    description: str | None = None,
    tags: Sequence[str] = (),
) -> Endpoint[Image]:
    body = {"name": name, "url": url, "region": region}
    if distribution is not None:
        body["distribution"] = distribution
    if description is not None:
        body["description"] = description
    if tags:
        body["tags"] = list(tags)
    return Endpoint("POST", "images", body=body, key="image", record=Image)
