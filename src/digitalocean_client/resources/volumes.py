"""Block Storage volumes and their snapshots.

https://docs.digitalocean.com/reference/api/api-reference/#tag/Block-Storage
"""

from dataclasses import dataclass
from datetime import datetime

from digitalocean_client.request import Endpoint
from digitalocean_client.resources.regions import Region


@dataclass(frozen=True)
class Volume:
    """A block storage volume.

    Attributes:
        id: Unique identifier.
        name: Lowercase letters, numbers and dashes, up to 64 characters.
        size_gigabytes: Size in GiB.
        region: Region the volume lives in.
        droplet_ids: Droplets the volume is attached to (at most one).
        description: Free-form description.
        created_at: Creation time.
        filesystem_type: Filesystem the volume was formatted with, if any.
        tags: Tags applied to the volume.
    """

    id: str
    name: str
    size_gigabytes: float
    region: Region
    created_at: datetime
    droplet_ids: tuple[int, ...] = ()
    description: str = ""
    filesystem_type: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    id: str
    name: str
    created_at: datetime
    regions: tuple[str, ...] = ()
    resource_id: str | None = None
    resource_type: str | None = None
    min_disk_size: int | None = None
    size_gigabytes: float | None = None


def _volume(volume_id: str) -> tuple[tuple[str, str], ...]:
    return (("id", volume_id),)


def list_volumes(region: str | None = None) -> Endpoint[Volume]:
    endpoint = Endpoint("GET", "volumes", key="volumes", record=Volume)
    if region is not None:
        endpoint = endpoint.with_query(region=region)
    return endpoint


def find_volumes_by_name(name: str, region: str) -> Endpoint[Volume]:
    """Volumes called `name` in `region`; a list endpoint with at most one item."""
    return Endpoint("GET", "volumes", query=(("name", name), ("region", region)), key="volumes", record=Volume)


def create_volume(
    name: str,
    size_gigabytes: int,
    *,
    region: str | None = None,
    snapshot_id: str | None = None,
    description: str | None = None,
) -> Endpoint[Volume]:
    """Create a volume in `region`, or from `snapshot_id` (not both)."""
    if region is not None and snapshot_id is not None:
        raise ValueError("region and snapshot_id are mutually exclusive")
    body = {"name": name, "size_gigabytes": size_gigabytes}
    if region is not None:
        body["region"] = region
    if snapshot_id is not None:
        body["snapshot_id"] = snapshot_id
    if description is not None:
        body["description"] = description
    return Endpoint("POST", "volumes", body=body, key="volume", record=Volume)


def get_volume(volume_id: str) -> Endpoint[Volume]:
    return Endpoint("GET", "volumes/{id}", path_params=_volume(volume_id), key="volume", record=Volume)


def delete_volume(volume_id: str) -> Endpoint[None]:
    return Endpoint("DELETE", "volumes/{id}", path_params=_volume(volume_id))


def delete_volume_by_name(name: str, region: str) -> Endpoint[None]:
    return Endpoint("DELETE", "volumes", query=(("name", name), ("region", region)))


def list_volume_snapshots(volume_id: str) -> Endpoint[Snapshot]:
    return Endpoint("GET", "volumes/{id}/snapshots", path_params=_volume(volume_id), key="snapshots", record=Snapshot)


def snapshot_volume(volume_id: str, name: str) -> Endpoint[Snapshot]:
    return Endpoint(
        "POST",
        "volumes/{id}/snapshots",
        path_params=_volume(volume_id),
        body={"name": name},
        key="snapshot",
        record=Snapshot,
    )
