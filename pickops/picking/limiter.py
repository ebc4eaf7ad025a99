from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Literal, Sequence, TypeVar

from pickops.persistence.state_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

LimiterMode = Literal["all", "fixed", "custom"]


@dataclass(frozen=True)
class LimiterConfig:
    mode: LimiterMode = "all"
    value: int | None = None

    @classmethod
    def all(cls) -> "LimiterConfig":
        return cls()

    @classmethod
    def fixed(cls, n: object) -> "LimiterConfig":
        return cls._bounded("fixed", n)

    @classmethod
    def custom(cls, n: object) -> "LimiterConfig":
        return cls._bounded("custom", n)

    @classmethod
    def _bounded(cls, mode: LimiterMode, n: object) -> "LimiterConfig":
        value = _positive_int(n)
        if value is None:
            return cls()
        return cls(mode=mode, value=value)

    @property
    def effective_limit(self) -> int | None:
        if self.mode == "all":
            return None
        return self.value

    def serialize(self) -> str:
        if self.mode == "fixed":
            return str(self.value)
        if self.mode == "custom":
            return f"custom:{self.value}"
        return "all"


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value >= 1 else None
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = int(text)
        except ValueError:
            return None
        return parsed if parsed > 0 else None
    return None


def parse_limiter_config(raw: object) -> LimiterConfig:
    if isinstance(raw, LimiterConfig):
        return raw
    if raw is None:
        return LimiterConfig.all()
    if isinstance(raw, str):
        text = raw.strip().lower()
        if not text or text == "all":
            return LimiterConfig.all()
        if text.startswith("custom:"):
            return LimiterConfig.custom(text.split(":", 1)[1])
        return LimiterConfig.fixed(text)
    return LimiterConfig.fixed(raw)


@dataclass(frozen=True)
class LimitResult(Generic[T]):
    capped: list[T]
    total_count: int
    capped_count: int

    @property
    def is_limited(self) -> bool:
        return self.capped_count < self.total_count

    @property
    def label(self) -> str:
        if self.is_limited:
            return f"limited to {self.capped_count} of {self.total_count}"
        return f"{self.total_count} orders"


def limit(orders: Sequence[T], config: LimiterConfig | str | int | None) -> LimitResult[T]:
    cfg = parse_limiter_config(config)
    items = list(orders)
    cap = cfg.effective_limit
    capped = items if cap is None else items[:cap]
    return LimitResult(capped=capped, total_count=len(items), capped_count=len(capped))


def limiter_key(warehouse_id: str, namespace: str | None = None) -> str:
    key = f"maxPickingOrders_{warehouse_id}"
    return f"{namespace}:{key}" if namespace else key


class LimiterPreferences:
    def __init__(self, store: KeyValueStore, default: str = "all", namespace: str | None = None):
        self.store = store
        self.default = parse_limiter_config(default)
        self.namespace = namespace

    def load(self, warehouse_id: str) -> LimiterConfig:
        try:
            raw = self.store.get(limiter_key(warehouse_id, self.namespace))
        except Exception as exc:
            logger.warning("limiter preference read failed warehouse_id=%s: %s", warehouse_id, exc)
            return self.default
        if raw is None:
            return self.default
        return parse_limiter_config(raw)

    def save(self, warehouse_id: str, config: LimiterConfig | str | int | None) -> LimiterConfig:
        cfg = parse_limiter_config(config)
        try:
            self.store.set(limiter_key(warehouse_id, self.namespace), cfg.serialize())
        except Exception as exc:
            logger.warning("limiter preference write failed warehouse_id=%s: %s", warehouse_id, exc)
        return cfg
