"""
tests/core/inventory/test_inventory_route53.py - zone/record lister and export tests
"""

from unittest.mock import MagicMock

import pytest

from conftest import create_mock_client_error
from core.exceptions import ProviderQueryError
from core.inventory.route53 import (
    COMPARE_HEADERS,
    ZONE_HEADERS,
    compare_zones,
    export_zone,
    list_zone_records,
    list_zones,
    list_zones_records,
    normalize_zone_id,
    to_record,
)
from core.inventory.types import Record, Zone


def a_record(name, *values, record_type="A"):
    return {"Name": name, "Type": record_type, "TTL": 300, "ResourceRecords": [{"Value": v} for v in values]}


def alias_record(name, target, record_type="A"):
    return {
        "Name": name,
        "Type": record_type,
        "AliasTarget": {"HostedZoneId": "Z2FDTNDATAQYW2", "DNSName": target, "EvaluateTargetHealth": False},
    }


def fake_route53(records_by_zone):
    """Route53 client serving one unpaginated page per zone"""
    route53 = MagicMock()

    def _list_resource_record_sets(HostedZoneId, **kwargs):
        if isinstance(records_by_zone[HostedZoneId], Exception):
            raise records_by_zone[HostedZoneId]
        return {"ResourceRecordSets": records_by_zone[HostedZoneId], "IsTruncated": False}

    route53.list_resource_record_sets.side_effect = _list_resource_record_sets
    return route53


class TestListZones:
    """list_zones tests"""

    def test_zones_across_pages(self):
        """Marker pagination, prefix stripped"""
        route53 = MagicMock()
        route53.list_hosted_zones.side_effect = [
            {
                "HostedZones": [{"Id": "/hostedzone/Z1", "Name": "example.com."}],
                "IsTruncated": True,
                "NextMarker": "Z2",
            },
            {"HostedZones": [{"Id": "/hostedzone/Z2", "Name": "example.org."}], "IsTruncated": False},
        ]

        zones = list_zones(route53)

        assert zones == [Zone(id="Z1", name="example.com."), Zone(id="Z2", name="example.org.")]
        assert route53.list_hosted_zones.call_args_list[1].kwargs == {"Marker": "Z2"}

    def test_no_zones(self, mock_route53_client):
        """empty account"""
        assert list_zones(mock_route53_client) == []

    def test_failure(self):
        """list_hosted_zones error -> ProviderQueryError"""
        route53 = MagicMock()
        route53.list_hosted_zones.side_effect = create_mock_client_error("AccessDenied")

        with pytest.raises(ProviderQueryError) as exc_info:
            list_zones(route53)

        assert exc_info.value.service == "route53"

    def test_normalize_zone_id(self):
        """bare ids are unchanged"""
        assert normalize_zone_id("/hostedzone/Z123") == "Z123"
        assert normalize_zone_id("Z123") == "Z123"


class TestListZoneRecords:
    """list_zone_records tests"""

    def test_plain_and_alias_records(self):
        """alias target as the only value, plain values verbatim"""
        route53 = fake_route53(
            {"Z1": [a_record("example.com.", "1.2.3.4", "5.6.7.8"), alias_record("www.example.com.", "lb.aws.com.")]}
        )

        records = list_zone_records(route53, "Z1")

        assert records == [
            Record(zone_id="Z1", name="example.com.", type="A", values=("1.2.3.4", "5.6.7.8")),
            Record(zone_id="Z1", name="www.example.com.", type="A", is_alias=True, values=("lb.aws.com.",)),
        ]

    def test_record_without_values(self):
        """no ResourceRecords -> empty values"""
        record = to_record("Z1", {"Name": "tp.example.com.", "Type": "A"})

        assert record.values == ()
        assert record.is_alias is False

    def test_record_pagination(self):
        """StartRecord* cursor built from the Next* fields"""
        route53 = MagicMock()
        route53.list_resource_record_sets.side_effect = [
            {
                "ResourceRecordSets": [a_record("a.example.com.", "1.1.1.1")],
                "IsTruncated": True,
                "NextRecordName": "b.example.com.",
                "NextRecordType": "A",
            },
            {
                "ResourceRecordSets": [a_record("b.example.com.", "2.2.2.2")],
                "IsTruncated": True,
                "NextRecordName": "c.example.com.",
                "NextRecordType": "A",
                "NextRecordIdentifier": "blue",
            },
            {"ResourceRecordSets": [a_record("c.example.com.", "3.3.3.3")], "IsTruncated": False},
        ]

        records = list_zone_records(route53, "Z1")

        assert [r.name for r in records] == ["a.example.com.", "b.example.com.", "c.example.com."]
        calls = route53.list_resource_record_sets.call_args_list
        assert calls[0].kwargs == {"HostedZoneId": "Z1"}
        assert calls[1].kwargs == {"HostedZoneId": "Z1", "StartRecordName": "b.example.com.", "StartRecordType": "A"}
        assert calls[2].kwargs == {
            "HostedZoneId": "Z1",
            "StartRecordName": "c.example.com.",
            "StartRecordType": "A",
            "StartRecordIdentifier": "blue",
        }


    def test_truncated_page_without_next_name(self):
        """IsTruncated with no NextRecordName -> ProviderQueryError"""
        route53 = MagicMock()
        route53.list_resource_record_sets.return_value = {
            "ResourceRecordSets": [a_record("a.example.com.", "1.1.1.1")],
            "IsTruncated": True,
        }

        with pytest.raises(ProviderQueryError, match="did not advance"):
            list_zone_records(route53, "Z1")

        assert route53.list_resource_record_sets.call_count == 1


class TestListZonesRecords:
    """list_zones_records tests"""

    def test_concatenated_in_argument_order(self):
        """zone order follows the arguments"""
        route53 = fake_route53({"Z1": [a_record("one.", "1.1.1.1")], "Z2": [a_record("two.", "2.2.2.2")]})

        records = list_zones_records(route53, "Z2", "Z1")

        assert [(r.zone_id, r.name) for r in records] == [("Z2", "two."), ("Z1", "one.")]

    def test_one_failing_zone_aborts(self):
        """no partial result across zones"""
        route53 = fake_route53(
            {"Z1": [a_record("one.", "1.1.1.1")], "Z2": create_mock_client_error("NoSuchHostedZone")}
        )

        with pytest.raises(ProviderQueryError) as exc_info:
            list_zones_records(route53, "Z1", "Z2")

        assert exc_info.value.error_code == "NoSuchHostedZone"

    def test_no_zone_ids(self, mock_route53_client):
        """nothing requested"""
        assert list_zones_records(mock_route53_client) == []
        mock_route53_client.list_resource_record_sets.assert_not_called()


class TestExportZone:
    """export_zone tests"""

    def test_rows_sorted_by_zone_id(self):
        """four columns, stable order inside a zone"""
        route53 = fake_route53(
            {
                "Z2": [a_record("b.example.org.", "2.2.2.2"), alias_record("a.example.org.", "cdn.example.net.")],
                "Z1": [a_record("z.example.com.", "1.1.1.1", "1.1.1.2")],
            }
        )

        data = export_zone(route53, "Z2", "Z1")

        assert data.headers == ZONE_HEADERS
        assert data.sort_column == 0
        assert data.rows == [
            ["Z1", "z.example.com.", "A", "1.1.1.1\n1.1.1.2"],
            ["Z2", "b.example.org.", "A", "2.2.2.2"],
            ["Z2", "a.example.org.", "A", "ALIAS cdn.example.net."],
        ]

    def test_failure_returns_no_rowset(self):
        """errors propagate"""
        route53 = fake_route53({"Z1": create_mock_client_error("Throttling")})

        with pytest.raises(ProviderQueryError):
            export_zone(route53, "Z1")


class TestCompareZones:
    """compare_zones tests"""

    def test_matches_missing_and_extra_records(self):
        """A/CNAME only, sorted by name"""
        route53 = fake_route53(
            {
                "ZL": [
                    a_record("same.example.com.", "1.1.1.1"),
                    a_record("diff.example.com.", "1.1.1.1"),
                    a_record("left.example.com.", "3.3.3.3"),
                    a_record("example.com.", "ns1.", record_type="NS"),
                ],
                "ZR": [
                    a_record("same.example.com.", "1.1.1.1"),
                    a_record("diff.example.com.", "lb.example.net.", record_type="CNAME"),
                    alias_record("right.example.com.", "cdn.example.net."),
                    a_record("example.com.", "ns2.", record_type="NS"),
                ],
            }
        )

        data = compare_zones(route53, "ZL", "ZR")

        assert data.headers == COMPARE_HEADERS
        assert data.rows == [
            ["diff.example.com.", "ZL", "A", "1.1.1.1", "CNAME", "lb.example.net.", "false"],
            ["left.example.com.", "ZL", "A", "3.3.3.3", "", "", ""],
            ["right.example.com.", "ZR", "", "", "A", "ALIAS cdn.example.net.", "false"],
            ["same.example.com.", "ZL", "A", "1.1.1.1", "A", "1.1.1.1", "true"],
        ]

    def test_right_record_of_other_type_matches(self):
        """a left A record is compared with a right TXT record of the same name"""
        route53 = fake_route53(
            {
                "ZL": [a_record("x.example.com.", "1.1.1.1")],
                "ZR": [a_record("x.example.com.", '"v=spf1 -all"', record_type="TXT")],
            }
        )

        data = compare_zones(route53, "ZL", "ZR")

        assert data.rows == [["x.example.com.", "ZL", "A", "1.1.1.1", "TXT", '"v=spf1 -all"', "false"]]

    def test_right_only_skipped_when_name_exists_on_left(self):
        """any left record of the name suppresses the right-only row"""
        route53 = fake_route53(
            {
                "ZL": [a_record("mail.example.com.", "10 mx.example.com.", record_type="MX")],
                "ZR": [a_record("mail.example.com.", "2.2.2.2")],
            }
        )

        data = compare_zones(route53, "ZL", "ZR")

        assert data.rows == []


class TestRoute53WithMoto:
    """zone listing and export against moto"""

    def test_export_created_zone(self, moto_route53):
        """plain and alias records exported"""
        zone = moto_route53.create_hosted_zone(Name="example.com.", CallerReference="test-1")
        zone_id = zone["HostedZone"]["Id"].replace("/hostedzone/", "")
        moto_route53.change_resource_record_sets(
            HostedZoneId=zone_id,
            ChangeBatch={
                "Changes": [
                    {
                        "Action": "CREATE",
                        "ResourceRecordSet": {
                            "Name": "api.example.com.",
                            "Type": "A",
                            "TTL": 60,
                            "ResourceRecords": [{"Value": "10.0.0.1"}, {"Value": "10.0.0.2"}],
                        },
                    },
                    {
                        "Action": "CREATE",
                        "ResourceRecordSet": {
                            "Name": "www.example.com.",
                            "Type": "A",
                            "AliasTarget": {
                                "HostedZoneId": zone_id,
                                "DNSName": "api.example.com.",
                                "EvaluateTargetHealth": False,
                            },
                        },
                    },
                ]
            },
        )

        assert Zone(id=zone_id, name="example.com.") in list_zones(moto_route53)

        data = export_zone(moto_route53, zone_id)
        rows = {(row[1], row[2]): row for row in data.rows}

        assert rows[("api.example.com.", "A")] == [zone_id, "api.example.com.", "A", "10.0.0.1\n10.0.0.2"]
        assert rows[("www.example.com.", "A")][3] == "ALIAS api.example.com."
        assert ("example.com.", "SOA") in rows
