"""DNS records of a domain.

https://docs.digitalocean.com/reference/api/api-reference/#tag/Domain-Records
"""

from dataclasses import dataclass
from typing import Any

from digitalocean_client.request import Endpoint


@dataclass(frozen=True)
class DomainRecord:
    """One DNS record.

    Attributes:
        id: Unique identifier.
        type: Record type (A, AAAA, CNAME, MX, TXT, SRV, ...).
        name: Host name, alias or service.
        data: Value, depending on the record type.
        ttl: Time to live in seconds.
        priority: SRV and MX only.
        port: SRV only.
        weight: SRV only.
    """

    id: int
    type: str
    name: str
    data: str
    ttl: int
    priority: int | None = None
    port: int | None = None
    weight: int | None = None
    flags: int | None = None
    tag: str | None = None


def _records_path(domain: str, record_id: int | None = None) -> tuple[str, tuple[tuple[str, str], ...]]:
    if record_id is None:
        return "domains/{domain}/records", (("domain", domain),)
    return "domains/{domain}/records/{id}", (("domain", domain), ("id", str(record_id)))


def _record_body(**fields: Any) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def list_domain_records(domain: str, *, type: str | None = None, name: str | None = None) -> Endpoint[DomainRecord]:
    path, params = _records_path(domain)
    endpoint = Endpoint("GET", path, path_params=params, key="domain_records", record=DomainRecord)
    if type is not None:
        endpoint = endpoint.with_query(type=type)
    if name is not None:
        endpoint = endpoint.with_query(name=name)
    return endpoint


def create_domain_record(
    domain: str,
    type: str,
    name: str,
    data: str,
    *,
    ttl: int | None = None,
    priority: int | None = None,
    port: int | None = None,
    weight: int | None = None,
) -> Endpoint[DomainRecord]:
    path, params = _records_path(domain)
    body = _record_body(type=type, name=name, data=data, ttl=ttl, priority=priority, port=port, weight=weight)
    return Endpoint("POST", path, path_params=params, body=body, key="domain_record", record=DomainRecord)


def get_domain_record(domain: str, record_id: int) -> Endpoint[DomainRecord]:
    path, params = _records_path(domain, record_id)
    return Endpoint("GET", path, path_params=params, key="domain_record", record=DomainRecord)


def update_domain_record(domain: str, record_id: int, **fields: Any) -> Endpoint[DomainRecord]:
    """Change the given fields of a record (type, name, data, ttl, priority, port, weight)."""
    if not fields:
        raise ValueError("update_domain_record needs at least one field")
    path, params = _records_path(domain, record_id)
    return Endpoint("PATCH", path, path_params=params, body=_record_body(**fields), key="domain_record", record=DomainRecord)


def delete_domain_record(domain: str, record_id: int) -> Endpoint[None]:
    path, params = _records_path(domain, record_id)
    return Endpoint("DELETE", path, path_params=params)
