"""
core/inventory/ec2.py - EC2/EBS resolution

Tag and instance resolvers built on the chunked batch resolver, and the
volume aggregator joining volumes with their attachments, instances and tags.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from core.io.rowset import RowSet

from .batch import MAX_FILTER_VALUES, resolve_in_chunks
from .pagination import Page, collect_pages
from .types import Attachment, Instance, ResourceTag, ResourceTags, Volume

logger = logging.getLogger(__name__)

NAME_TAG = "Name"
KUBERNETES_CLUSTER_TAG = "KubernetesCluster"
BEANSTALK_ENVIRONMENT_TAG = "elasticbeanstalk:environment-name"

VOLUME_HEADERS = ["volumeId", "size", "type", "instanceId", "instanceName", "kubernetesCluster", "ebEnv"]


def _token_page(response: dict[str, Any], key: str) -> Page:
    token = response.get("NextToken")
    return Page(response.get(key, []), token, not token)


def _filtered_pages(ec2, operation: str, key: str, filter_name: str, values: Sequence[str]) -> list[dict[str, Any]]:
    """All pages of an EC2 describe call filtered on ``values``"""
    call = getattr(ec2, operation)

    def fetch_page(cursor: str | None) -> Page:
        kwargs: dict[str, Any] = {"Filters": [{"Name": filter_name, "Values": list(values)}]}
        if cursor:
            kwargs["NextToken"] = cursor
        return _token_page(call(**kwargs), key)

    return collect_pages(fetch_page, service="ec2", operation=operation)


def describe_tags(ec2, resource_ids: Sequence[str], chunk_size: int = MAX_FILTER_VALUES) -> dict[str, ResourceTags]:
    """Resolve tags for resource IDs (volumes, instances, ...)

    Resources without tags are absent from the result.

    Args:
        ec2: boto3 EC2 client
        resource_ids: resource IDs
        chunk_size: IDs per DescribeTags call

    Returns:
        resource ID -> ResourceTags
    """

    def lookup(chunk: Sequence[str]) -> Iterable[tuple[str, ResourceTag]]:
        for tag in _filtered_pages(ec2, "describe_tags", "Tags", "resource-id", chunk):
            yield tag["ResourceId"], ResourceTag(key=tag["Key"], value=tag.get("Value", ""))

    resolved = resolve_in_chunks(resource_ids, lookup, chunk_size, service="ec2", operation="describe_tags")
    return {resource_id: ResourceTags(tags) for resource_id, tags in resolved.items()}


def describe_instances(
    ec2, instance_ids: Sequence[str], chunk_size: int = MAX_FILTER_VALUES
) -> dict[str, Instance]:
    """Resolve instances with their tags and display name

    Repeated IDs are looked up once. IDs that do not exist are missing from
    the result.

    Args:
        ec2: boto3 EC2 client
        instance_ids: instance IDs, duplicates allowed
        chunk_size: IDs per DescribeInstances/DescribeTags call

    Returns:
        instance ID -> Instance
    """
    unique_ids = list(dict.fromkeys(instance_ids))
    logger.info("Resolving %d instances", len(unique_ids))

    def lookup(chunk: Sequence[str]) -> Iterable[tuple[str, str]]:
        for reservation in _filtered_pages(ec2, "describe_instances", "Reservations", "instance-id", chunk):
            for inst in reservation.get("Instances", []):
                yield inst["InstanceId"], inst["InstanceId"]

    found = resolve_in_chunks(unique_ids, lookup, chunk_size, service="ec2", operation="describe_instances")
    tags = describe_tags(ec2, unique_ids, chunk_size)

    instances: dict[str, Instance] = {}
    for instance_id in found:
        instance_tags = tags.get(instance_id, ResourceTags())
        instances[instance_id] = Instance(
            id=instance_id,
            display_name=instance_tags.value_of(NAME_TAG),
            tags=instance_tags,
        )
    return instances


def list_volume_records(ec2) -> list[dict[str, Any]]:
    """Raw DescribeVolumes records, all pages"""

    def fetch_page(cursor: str | None) -> Page:
        kwargs = {"NextToken": cursor} if cursor else {}
        return _token_page(ec2.describe_volumes(**kwargs), "Volumes")

    return collect_pages(fetch_page, service="ec2", operation="describe_volumes")


def describe_volumes(ec2, chunk_size: int = MAX_FILTER_VALUES) -> list[Volume]:
    """List EBS volumes joined with their tags and attached instances

    Only the first attachment of a volume is consulted. An attachment whose
    instance cannot be resolved is kept with ``instance=None``.

    Args:
        ec2: boto3 EC2 client
        chunk_size: IDs per filtered lookup

    Returns:
        Volume list in listing order
    """
    records = list_volume_records(ec2)
    logger.info("Got %d volumes", len(records))

    volume_ids = [rec["VolumeId"] for rec in records]
    instance_ids = [rec["Attachments"][0]["InstanceId"] for rec in records if rec.get("Attachments")]

    tags = describe_tags(ec2, volume_ids, chunk_size)
    instances = describe_instances(ec2, instance_ids, chunk_size)

    volumes = []
    for rec in records:
        attachment = None
        if rec.get("Attachments"):
            first = rec["Attachments"][0]
            attachment = Attachment(
                instance_id=first["InstanceId"],
                device=first.get("Device", ""),
                instance=instances.get(first["InstanceId"]),
            )

        volumes.append(
            Volume(
                id=rec["VolumeId"],
                zone=rec.get("AvailabilityZone", ""),
                storage_class=rec.get("VolumeType", ""),
                state=rec.get("State", ""),
                size_gib=rec.get("Size", 0),
                tags=tags.get(rec["VolumeId"], ResourceTags()),
                attachment=attachment,
            )
        )

    return volumes


def volume_row(volume: Volume) -> list[str]:
    """Report row for one volume, instance columns empty when unresolved"""
    instance_id = name = cluster = environment = ""

    if volume.attachment is not None:
        instance_id = volume.attachment.instance_id
        instance = volume.attachment.instance
        if instance is not None:
            name = instance.display_name
            cluster = instance.tags.value_of(KUBERNETES_CLUSTER_TAG)
            environment = instance.tags.value_of(BEANSTALK_ENVIRONMENT_TAG)

    return [volume.id, str(volume.size_gib), volume.storage_class, instance_id, name, cluster, environment]


def export_volumes(ec2) -> RowSet:
    """Volumes with their instances as a RowSet sorted by volume ID"""
    rows = [volume_row(volume) for volume in describe_volumes(ec2)]
    data = RowSet(headers=list(VOLUME_HEADERS), rows=rows, sort_column=0)
    data.sort()
    return data
