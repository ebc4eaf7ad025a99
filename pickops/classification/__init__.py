from pickops.classification.rules import (
    DEFAULT_FULFILLMENT_RULES,
    Bucket,
    BucketSummary,
    classify,
    detect_conflicts,
    needs_picking,
    resolve_rules,
    summarize,
)

__all__ = [
    "DEFAULT_FULFILLMENT_RULES",
    "Bucket",
    "BucketSummary",
    "classify",
    "detect_conflicts",
    "needs_picking",
    "resolve_rules",
    "summarize",
]
