"""
core/inventory/types.py - Inventory dataclasses

Simplified views of Route53 and EC2/EBS resources used to build reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResourceTag:
    """Single AWS resource tag key/value pair"""

    key: str
    value: str


class ResourceTags(tuple):
    """Ordered, immutable sequence of ResourceTag

    Duplicate keys are allowed; lookups return the last matching value.
    """

    __slots__ = ()

    def value_of(self, key: str) -> str:
        """Return the value of the last tag named ``key`` or an empty string"""
        value = ""
        for tag in self:
            if tag.key == key:
                value = tag.value
        return value


@dataclass(frozen=True)
class Instance:
    """EC2 instance reduced to identity and tags

    Attributes:
        id: instance ID
        display_name: value of the ``Name`` tag (empty when missing)
        tags: resolved tags
    """

    id: str
    display_name: str = ""
    tags: ResourceTags = field(default_factory=ResourceTags)


@dataclass(frozen=True)
class Attachment:
    """Attachment of an EBS volume to an EC2 instance

    ``instance`` is None when the instance could not be resolved.
    """

    instance_id: str
    device: str
    instance: Instance | None = None


@dataclass(frozen=True)
class Volume:
    """EBS volume with its tags and (first) attachment

    Attributes:
        id: volume ID
        zone: availability zone
        storage_class: volume type (gp3, io2, ...)
        state: volume state (in-use, available, ...)
        size_gib: size in GiB
        tags: resolved tags, empty when the volume has none
        attachment: first attachment, None when unattached
    """

    id: str
    zone: str
    storage_class: str
    state: str
    size_gib: int
    tags: ResourceTags = field(default_factory=ResourceTags)
    attachment: Attachment | None = None

    @property
    def is_attached(self) -> bool:
        return self.attachment is not None


@dataclass(frozen=True)
class Zone:
    """Route53 hosted zone"""

    id: str
    name: str


@dataclass(frozen=True)
class Record:
    """Route53 resource record set

    Alias records carry the alias target's DNS name as their only value.
    """

    zone_id: str
    name: str
    type: str
    is_alias: bool = False
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.is_alias and not self.values:
            raise ValueError(f"alias record {self.name} ({self.type}) has no target")

    def format_value(self) -> str:
        """Value as shown in reports: ``ALIAS <target>`` or newline-joined values"""
        if self.is_alias:
            return "ALIAS " + self.values[0]
        return "\n".join(self.values)
