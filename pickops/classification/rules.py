from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from pickops.domain.orders.aggregates import Order
from pickops.domain.warehouses.aggregates import FulfillmentRules


class Bucket(str, Enum):
    NEEDS_SHIPPING = "needs_shipping"
    EXCLUDED = "excluded"
    COMPLETED = "completed"
    OTHER = "other"


DEFAULT_FULFILLMENT_RULES = FulfillmentRules(
    to_ship_statuses=["PENDING", "PROCESSING", "ASSIGNED", "PICKING", "PACKING", "READY_TO_SHIP"],
    excluded_statuses=["CANCELLED"],
    completed_statuses=["SHIPPED", "DELIVERED"],
    display_text="orders to ship",
    include_completed=False,
)

DEFAULT_PICKED_STATUSES = frozenset({"PICKING", "PACKING", "PACKED", "READY_TO_SHIP", "SHIPPED", "DELIVERED"})


def _normalize(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip().upper()
    return text or None


def _normalize_all(values: Iterable[object] | None) -> frozenset[str]:
    return frozenset(v for v in (_normalize(x) for x in values or []) if v)


@dataclass(frozen=True)
class ResolvedRules:
    to_ship: frozenset[str]
    excluded: frozenset[str]
    completed: frozenset[str]
    picked: frozenset[str]
    display_text: str
    include_completed: bool
    is_default: bool


def resolve_rules(rules: FulfillmentRules | None) -> ResolvedRules:
    # A rule set that ships nothing is treated the same as a missing one.
    is_default = rules is None or not _normalize_all(rules.to_ship_statuses)
    source = DEFAULT_FULFILLMENT_RULES if is_default else rules
    picked = source.picked_statuses if rules is None or rules.picked_statuses is None else rules.picked_statuses
    return ResolvedRules(
        to_ship=_normalize_all(source.to_ship_statuses),
        excluded=_normalize_all(source.excluded_statuses),
        completed=_normalize_all(source.completed_statuses),
        picked=DEFAULT_PICKED_STATUSES if picked is None else _normalize_all(picked),
        display_text=(rules.display_text if rules is not None and rules.display_text else source.display_text),
        include_completed=bool(rules.include_completed) if rules is not None else False,
        is_default=is_default,
    )


def _order_statuses(order: Order) -> set[str]:
    return {s for s in (_normalize(order.status), _normalize(order.fulfillment_status)) if s}


def classify_resolved(order: Order, rules: ResolvedRules) -> Bucket:
    statuses = _order_statuses(order)
    if statuses & rules.excluded:
        return Bucket.EXCLUDED
    if statuses & rules.completed:
        return Bucket.COMPLETED
    if statuses & rules.to_ship:
        return Bucket.NEEDS_SHIPPING
    return Bucket.OTHER


def classify(order: Order, rules: FulfillmentRules | None) -> Bucket:
    return classify_resolved(order, resolve_rules(rules))


def needs_picking_resolved(order: Order, rules: ResolvedRules) -> bool:
    if classify_resolved(order, rules) != Bucket.NEEDS_SHIPPING:
        return False
    return _normalize(order.fulfillment_status) not in rules.picked


def needs_picking(order: Order, rules: FulfillmentRules | None) -> bool:
    return needs_picking_resolved(order, resolve_rules(rules))


@dataclass(frozen=True)
class BucketSummary:
    counts: dict[Bucket, int]
    display_count: int
    display_text: str
    include_completed: bool

    @property
    def label(self) -> str:
        return f"{self.display_count} {self.display_text}"

    def to_dict(self) -> dict:
        return {
            "counts": {bucket.value: count for bucket, count in self.counts.items()},
            "display_count": self.display_count,
            "display_text": self.display_text,
            "include_completed": self.include_completed,
            "label": self.label,
        }


def summarize(orders: Iterable[Order], rules: FulfillmentRules | None) -> BucketSummary:
    resolved = resolve_rules(rules)
    counts = {bucket: 0 for bucket in Bucket}
    for order in orders:
        counts[classify_resolved(order, resolved)] += 1

    display_count = counts[Bucket.NEEDS_SHIPPING]
    if resolved.include_completed:
        display_count += counts[Bucket.COMPLETED]
    return BucketSummary(
        counts=counts,
        display_count=display_count,
        display_text=resolved.display_text,
        include_completed=resolved.include_completed,
    )


def detect_conflicts(rules: FulfillmentRules) -> dict[str, list[str]]:
    sets = {
        "to_ship_statuses": _normalize_all(rules.to_ship_statuses),
        "excluded_statuses": _normalize_all(rules.excluded_statuses),
        "completed_statuses": _normalize_all(rules.completed_statuses),
    }
    conflicts: dict[str, list[str]] = {}
    for status in sorted(set().union(*sets.values())):
        owners = [name for name, members in sets.items() if status in members]
        if len(owners) > 1:
            conflicts[status] = owners
    return conflicts
