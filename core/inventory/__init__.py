"""
core/inventory - Inventory resolution and report building

Route53:
    list_zones, list_zone_records, list_zones_records, export_zone, compare_zones

EC2/EBS:
    describe_tags, describe_instances, describe_volumes, export_volumes

Building blocks:
    collect_pages (paginated accumulator), resolve_in_chunks (chunked batch resolver)

Example:
    >>> from core.inventory import export_zone
    >>> data = export_zone(route53, "Z1D633PJN98FT9")
"""

from .batch import MAX_FILTER_VALUES, chunked, resolve_in_chunks
from .ec2 import describe_instances, describe_tags, describe_volumes, export_volumes
from .pagination import Page, collect_pages
from .route53 import compare_zones, export_zone, list_zone_records, list_zones, list_zones_records
from .types import Attachment, Instance, Record, ResourceTag, ResourceTags, Volume, Zone

__all__: list[str] = [
    # Building blocks
    "MAX_FILTER_VALUES",
    "Page",
    "chunked",
    "collect_pages",
    "resolve_in_chunks",
    # EC2/EBS
    "describe_instances",
    "describe_tags",
    "describe_volumes",
    "export_volumes",
    # Route53
    "compare_zones",
    "export_zone",
    "list_zone_records",
    "list_zones",
    "list_zones_records",
    # Types
    "Attachment",
    "Instance",
    "Record",
    "ResourceTag",
    "ResourceTags",
    "Volume",
    "Zone",
]
