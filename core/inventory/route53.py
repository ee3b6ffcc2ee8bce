"""
core/inventory/route53.py - Route53 zones and records

Lists hosted zones and their record sets and turns them into report rows.
Multi-zone calls stop at the first failing zone; no partial export is returned.
"""

from __future__ import annotations

import logging
from typing import Any

from core.io.rowset import RowSet

from .pagination import Page, collect_pages
from .types import Record, Zone

logger = logging.getLogger(__name__)

HOSTED_ZONE_PREFIX = "/hostedzone/"

ZONE_HEADERS = ["ZoneID", "Name", "Type", "Value"]
COMPARE_HEADERS = ["Name", "ZoneID", "TypeA", "ValueA", "TypeB", "ValueB", "IsEqual"]

# record types compared between zones
COMPARED_TYPES = ("A", "CNAME")


def normalize_zone_id(zone_id: str) -> str:
    """Strip the ``/hostedzone/`` prefix from a zone ID"""
    return zone_id.replace(HOSTED_ZONE_PREFIX, "")


def list_zones(route53) -> list[Zone]:
    """List all hosted zones visible to the current credentials"""

    def fetch_page(marker: str | None) -> Page:
        kwargs = {"Marker": marker} if marker else {}
        response = route53.list_hosted_zones(**kwargs)
        truncated = response.get("IsTruncated", False)
        return Page(response.get("HostedZones", []), response.get("NextMarker"), not truncated)

    zones = collect_pages(fetch_page, service="route53", operation="list_hosted_zones")
    return [Zone(id=normalize_zone_id(zone["Id"]), name=zone["Name"]) for zone in zones]


def to_record(zone_id: str, record_set: dict[str, Any]) -> Record:
    """Map a raw ResourceRecordSet into a Record"""
    alias = record_set.get("AliasTarget")
    if alias is not None:
        values: tuple[str, ...] = (alias["DNSName"],)
    else:
        values = tuple(rr["Value"] for rr in record_set.get("ResourceRecords", []))

    return Record(
        zone_id=zone_id,
        name=record_set["Name"],
        type=record_set["Type"],
        is_alias=alias is not None,
        values=values,
    )


def list_zone_records(route53, zone_id: str) -> list[Record]:
    """List every record set of one hosted zone"""

    def fetch_page(start: dict[str, str] | None) -> Page:
        response = route53.list_resource_record_sets(HostedZoneId=zone_id, **(start or {}))
        if not response.get("IsTruncated", False):
            return Page(response.get("ResourceRecordSets", []))

        if not response.get("NextRecordName"):
            # collect_pages reports the missing cursor
            return Page(response.get("ResourceRecordSets", []), None, False)

        next_start = {"StartRecordName": response["NextRecordName"]}
        if response.get("NextRecordType"):
            next_start["StartRecordType"] = response["NextRecordType"]
        if response.get("NextRecordIdentifier"):
            next_start["StartRecordIdentifier"] = response["NextRecordIdentifier"]
        return Page(response.get("ResourceRecordSets", []), next_start, False)

    record_sets = collect_pages(fetch_page, service="route53", operation="list_resource_record_sets")
    logger.info("Found %d records for zone %s", len(record_sets), zone_id)

    return [to_record(zone_id, rs) for rs in record_sets]


def list_zones_records(route53, *zone_ids: str) -> list[Record]:
    """Records of several zones, concatenated in the order the IDs are given"""
    records: list[Record] = []
    for zone_id in zone_ids:
        records.extend(list_zone_records(route53, zone_id))
    return records


def export_zone(route53, *zone_ids: str) -> RowSet:
    """Records of the given zones as a RowSet sorted by zone ID

    Args:
        route53: boto3 Route53 client
        *zone_ids: hosted zone IDs

    Returns:
        RowSet with columns ZoneID, Name, Type, Value
    """
    records = list_zones_records(route53, *zone_ids)
    rows = [[record.zone_id, record.name, record.type, record.format_value()] for record in records]

    data = RowSet(headers=list(ZONE_HEADERS), rows=rows, sort_column=0)
    data.sort()
    return data


def compare_zones(route53, left_zone_id: str, right_zone_id: str) -> RowSet:
    """Compare the A and CNAME records of two zones by name

    Left A/CNAME records are matched against the right record of the same
    name, whatever its type (the last one listed wins). Right A/CNAME records
    whose name has no record at all on the left are appended with an empty
    left side.

    Returns:
        RowSet with columns Name, ZoneID, TypeA, ValueA, TypeB, ValueB, IsEqual
    """
    left = list_zone_records(route53, left_zone_id)
    right = list_zone_records(route53, right_zone_id)

    right_by_name = {record.name: record for record in right}
    left_names = {record.name for record in left}

    rows = []
    for record in left:
        if record.type not in COMPARED_TYPES:
            continue
        other = right_by_name.get(record.name)
        other_type = other_value = is_equal = ""
        if other is not None:
            other_type = other.type
            other_value = other.format_value()
            is_equal = str(record.format_value() == other_value).lower()
        rows.append([record.name, record.zone_id, record.type, record.format_value(), other_type, other_value, is_equal])

    for record in right:
        if record.type not in COMPARED_TYPES or record.name in left_names:
            continue
        rows.append([record.name, record.zone_id, "", "", record.type, record.format_value(), "false"])

    data = RowSet(headers=list(COMPARE_HEADERS), rows=rows, sort_column=0)
    data.sort()
    return data
