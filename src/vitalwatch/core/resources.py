"""Initiator-type bucketing for resource loads."""

from enum import StrEnum
from urllib.parse import urlsplit


class ResourceBucket(StrEnum):
    SCRIPT = "SCRIPT"
    STYLESHEET = "STYLESHEET"
    IMAGE = "IMAGE"
    FONT = "FONT"
    FETCH = "FETCH"
    OTHER = "OTHER"


RESOURCE_PREFIX = "RESOURCE_"
SIZE_PREFIX = "SIZE_"

_SUFFIX_RULES: tuple[tuple[tuple[str, ...], ResourceBucket], ...] = (
    ((".js", ".mjs"), ResourceBucket.SCRIPT),
    ((".css",), ResourceBucket.STYLESHEET),
    (
        (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif", ".ico"),
        ResourceBucket.IMAGE,
    ),
    ((".woff", ".woff2", ".ttf", ".otf", ".eot"), ResourceBucket.FONT),
)

_PATH_PREFIX_RULES: tuple[tuple[str, ResourceBucket], ...] = (
    ("/api/", ResourceBucket.FETCH),
)

_INITIATOR_TYPES: dict[str, ResourceBucket] = {
    "script": ResourceBucket.SCRIPT,
    "link": ResourceBucket.STYLESHEET,
    "css": ResourceBucket.STYLESHEET,
    "img": ResourceBucket.IMAGE,
    "image": ResourceBucket.IMAGE,
    "fetch": ResourceBucket.FETCH,
    "xmlhttprequest": ResourceBucket.FETCH,
    "beacon": ResourceBucket.FETCH,
}


def classify_resource(url: str, initiator_type: str = "") -> ResourceBucket:
    """Bucket a resource by URL, falling back to the host's initiator type."""
    path = urlsplit(url).path.lower()
    for suffixes, bucket in _SUFFIX_RULES:
        if path.endswith(suffixes):
            return bucket
    for prefix, bucket in _PATH_PREFIX_RULES:
        if prefix in path:
            return bucket
    return _INITIATOR_TYPES.get(initiator_type.lower(), ResourceBucket.OTHER)


def resource_metric(bucket: ResourceBucket) -> str:
    return f"{RESOURCE_PREFIX}{bucket}"


def size_metric(bucket: ResourceBucket) -> str:
    return f"{SIZE_PREFIX}{bucket}"
