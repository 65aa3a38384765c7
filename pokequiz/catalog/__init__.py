from .entity import (
    LANGUAGES,
    FALLBACK_LANGUAGE,
    DEFAULT_IMAGE_TEMPLATE,
    Entity,
    display_name,
    image_ref,
    load_catalog,
    parse_catalog,
)
from .partitions import Partition, load_partitions, get_partition, filter_by_partitions, review_pool

__all__ = [
    "LANGUAGES",
    "FALLBACK_LANGUAGE",
    "DEFAULT_IMAGE_TEMPLATE",
    "Entity",
    "display_name",
    "image_ref",
    "load_catalog",
    "parse_catalog",
    "Partition",
    "load_partitions",
    "get_partition",
    "filter_by_partitions",
    "review_pool",
]
