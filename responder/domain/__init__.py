"""Domain rules for status descriptors, severity tiers and envelope merging."""

from .merge import domain_merge_layers
from .models import SeverityTier, StatusDescriptor
from .status_table import (
    STATUS_DESCRIPTORS,
    StatusCode,
    domain_status_is_code_type,
    domain_status_lookup,
    domain_status_severity_tier,
)

__all__ = [
    "STATUS_DESCRIPTORS",
    "SeverityTier",
    "StatusCode",
    "StatusDescriptor",
    "domain_merge_layers",
    "domain_status_is_code_type",
    "domain_status_lookup",
    "domain_status_severity_tier",
]
