"""Tests for resource endpoint descriptors and their record types."""

from datetime import UTC, datetime

import pytest

from digitalocean_client import ClientConfig
from digitalocean_client.decoder import decode_page, decode_response
from digitalocean_client.request import RequestBuilder
from digitalocean_client.resources import domains, droplets, floating_ips, images, regions, sizes, tags, volumes
from digitalocean_client.testing import create_mock_response

BASE = "https://api.digitalocean.com/v2"


@pytest.fixture
def build():
    builder = RequestBuilder(ClientConfig(token="test-token"))
    return builder.build


class TestDroplets:
    @pytest.mark.unit
    def test_list_by_tag(self, build):
        request = build(droplets.list_droplets(tag_name="env:prod"))

        assert str(request.url) == f"{BASE}/droplets?tag_name=env%3Aprod"

    @pytest.mark.unit
    def test_delete_by_tag(self, build):
        request = build(droplets.delete_droplets_by_tag("web"))

        assert request.method == "DELETE"
        assert str(request.url) == f"{BASE}/droplets?tag_name=web"

    @pytest.mark.unit
    def test_decode_droplet(self):
        body = {
            "droplet": {
                "id": 3164444,
                "name": "example.com",
                "memory": 1024,
                "vcpus": 1,
                "disk": 25,
                "locked": False,
                "status": "active",
                "created_at": "2020-07-21T18:37:44Z",
                "features": ["backups", "ipv6"],
                "region": {"slug": "nyc3", "name": "New York 3", "sizes": ["s-1vcpu-1gb"], "available": True},
                "size_slug": "s-1vcpu-1gb",
                "volume_ids": [],
                "tags": ["web", "env:prod"],
                "networks": {"v4": []},
            }
        }

        droplet = decode_response(create_mock_response(json=body), droplets.get_droplet(3164444))

        assert droplet.status == "active"
        assert droplet.created_at == datetime(2020, 7, 21, 18, 37, 44, tzinfo=UTC)
        assert droplet.region.sizes == ("s-1vcpu-1gb",)
        assert droplet.tags == ("web", "env:prod")


class TestVolumes:
    @pytest.mark.unit
    def test_create_in_region(self, build):
        request = build(volumes.create_volume("data", 100, region="nyc1"))

        assert request.method == "POST"
        assert request.content == b'{"name":"data","size_gigabytes":100,"region":"nyc1"}'

    @pytest.mark.unit
    def test_create_from_snapshot(self, build):
        request = build(volumes.create_volume("data", 100, snapshot_id="b0798135"))

        assert request.content == b'{"name":"data","size_gigabytes":100,"snapshot_id":"b0798135"}'

    @pytest.mark.unit
    def test_region_and_snapshot_exclusive(self):
        with pytest.raises(ValueError, match="mutually exclusive"):
            volumes.create_volume("data", 100, region="nyc1", snapshot_id="b0798135")

    @pytest.mark.unit
    def test_find_and_delete_by_name(self, build):
        found = build(volumes.find_volumes_by_name("data", "nyc1"))
        deleted = build(volumes.delete_volume_by_name("data", "nyc1"))

        assert str(found.url) == f"{BASE}/volumes?name=data&region=nyc1"
        assert deleted.method == "DELETE"
        assert deleted.url == found.url

    @pytest.mark.unit
    def test_snapshot_volume(self, build):
        request = build(volumes.snapshot_volume("7724db7c", "nightly"))

        assert str(request.url) == f"{BASE}/volumes/7724db7c/snapshots"
        assert request.content == b'{"name":"nightly"}'

    @pytest.mark.unit
    def test_decode_snapshot_page(self):
        body = {
            "snapshots": [
                {
                    "id": "8eb4d51a",
                    "name": "big-data-snapshot1475170902",
                    "regions": ["nyc1"],
                    "created_at": "2020-09-29T17:41:42Z",
                    "resource_id": "82a48a18",
                    "resource_type": "volume",
                    "min_disk_size": 10,
                    "size_gigabytes": 0,
                }
            ],
            "links": {},
            "meta": {"total": 1},
        }

        page = decode_page(create_mock_response(json=body), volumes.list_volume_snapshots("82a48a18"))

        assert [s.name for s in page.items] == ["big-data-snapshot1475170902"]
        assert page.items[0].size_gigabytes == 0.0
        assert page.total == 1


class TestTags:
    @pytest.mark.unit
    def test_tag_name_is_path_encoded(self, build):
        request = build(tags.get_tag("env:prod"))

        assert request.url.raw_path == b"/v2/tags/env%3Aprod"

    @pytest.mark.unit
    def test_tag_resources_body(self, build):
        request = build(tags.tag_resources("web", [("9569411", "droplet"), ("7555620", "image")]))

        assert request.method == "POST"
        assert str(request.url) == f"{BASE}/tags/web/resources"
        assert request.content == (
            b'{"resources":[{"resource_id":"9569411","resource_type":"droplet"},'
            b'{"resource_id":"7555620","resource_type":"image"}]}'
        )

    @pytest.mark.unit
    def test_untag_is_delete_with_body(self, build):
        request = build(tags.untag_resources("web", [("9569411", "droplet")]))

        assert request.method == "DELETE"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content

    @pytest.mark.unit
    def test_decode_tag(self):
        body = {"tag": {"name": "extra-awesome", "resources": {"count": 0, "droplets": {"count": 0}}}}

        tag = decode_response(create_mock_response(201, json=body), tags.create_tag("extra-awesome"))

        assert tag.name == "extra-awesome"
        assert tag.resources["droplets"] == {"count": 0}


class TestDomainRecords:
    @pytest.mark.unit
    def test_list_filters(self, build):
        request = build(domains.list_domain_records("example.com", type="A", name="www.example.com"))

        assert str(request.url) == f"{BASE}/domains/example.com/records?type=A&name=www.example.com"

    @pytest.mark.unit
    def test_create_omits_unset_fields(self, build):
        request = build(domains.create_domain_record("example.com", "A", "www", "162.10.66.0", ttl=1800))

        assert request.content == b'{"type":"A","name":"www","data":"162.10.66.0","ttl":1800}'

    @pytest.mark.unit
    def test_update_is_patch(self, build):
        request = build(domains.update_domain_record("example.com", 3352896, name="blog"))

        assert request.method == "PATCH"
        assert str(request.url) == f"{BASE}/domains/example.com/records/3352896"
        assert request.content == b'{"name":"blog"}'

    @pytest.mark.unit
    def test_update_needs_fields(self):
        with pytest.raises(ValueError):
            domains.update_domain_record("example.com", 3352896)

    @pytest.mark.unit
    def test_decode_record(self):
        body = {
            "domain_record": {
                "id": 28448433,
                "type": "MX",
                "name": "@",
                "data": "mail.example.com",
                "priority": 10,
                "port": None,
                "ttl": 1800,
                "weight": None,
                "flags": None,
                "tag": None,
            }
        }

        record = decode_response(create_mock_response(json=body), domains.get_domain_record("example.com", 28448433))

        assert record == domains.DomainRecord(
            id=28448433, type="MX", name="@", data="mail.example.com", ttl=1800, priority=10
        )


class TestFloatingIps:
    @pytest.mark.unit
    def test_assign_and_reserve_bodies(self, build):
        assert build(floating_ips.assign_new_floating_ip(123)).content == b'{"droplet_id":123}'
        assert build(floating_ips.reserve_floating_ip("nyc3")).content == b'{"region":"nyc3"}'

    @pytest.mark.unit
    def test_decode_unassigned(self):
        body = {"floating_ip": {"ip": "45.55.96.47", "region": {"slug": "nyc3", "name": "New York 3"}, "droplet": None}}

        ip = decode_response(create_mock_response(json=body), floating_ips.get_floating_ip("45.55.96.47"))

        assert ip.ip == "45.55.96.47"
        assert ip.droplet is None
        assert ip.locked is False


class TestImagesRegionsSizes:
    @pytest.mark.unit
    def test_list_images_filters(self, build):
        request = build(images.list_images(type="distribution", private=True))

        assert str(request.url) == f"{BASE}/images?type=distribution&private=true"

    @pytest.mark.unit
    def test_create_custom_image(self, build):
        request = build(
            images.create_custom_image("ubuntu", "http://cloud-images.ubuntu.com/x.img", "nyc3", tags=["base"])
        )

        assert request.content == (
            b'{"name":"ubuntu","url":"http://cloud-images.ubuntu.com/x.img","region":"nyc3","tags":["base"]}'
        )

    @pytest.mark.unit
    def test_decode_size_page(self):
        body = {
            "sizes": [
                {
                    "slug": "s-1vcpu-1gb",
                    "memory": 1024,
                    "vcpus": 1,
                    "disk": 25,
                    "transfer": 1,
                    "price_monthly": 5,
                    "price_hourly": 0.00743999984115362,
                    "regions": ["ams2", "nyc3"],
                    "available": True,
                    "description": "Basic",
                }
            ]
        }

        page = decode_page(create_mock_response(json=body), sizes.list_sizes())

        assert page.items[0].price_monthly == 5.0
        assert page.next_url is None

    @pytest.mark.unit
    def test_decode_region_page(self):
        body = {"regions": [{"slug": "nyc1", "name": "New York 1", "available": True, "features": ["backups"]}]}

        page = decode_page(create_mock_response(json=body), regions.list_regions())

        assert page.items == (regions.Region(slug="nyc1", name="New York 1", available=True, features=("backups",)),)
