from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Union


@dataclass(frozen=True)
class SetShowOrdersToShip:
    checked: bool


@dataclass(frozen=True)
class SetShowItemsToShip:
    checked: bool


@dataclass(frozen=True)
class ToggleOrderSelection:
    order_id: str


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class Recompute:
    """Re-apply invariants after the derived inputs changed (order refresh, pick toggles)."""


SelectionAction = Union[SetShowOrdersToShip, SetShowItemsToShip, ToggleOrderSelection, ClearSelection, Recompute]


@dataclass(frozen=True)
class SelectionContext:
    orders_to_ship: frozenset[str]
    orders_to_pick: frozenset[str]
    remaining_to_pick: int

    @classmethod
    def build(cls, orders_to_ship: Iterable[str], orders_to_pick: Iterable[str], remaining_to_pick: int) -> "SelectionContext":
        return cls(
            orders_to_ship=frozenset(orders_to_ship),
            orders_to_pick=frozenset(orders_to_pick),
            remaining_to_pick=max(0, int(remaining_to_pick)),
        )


@dataclass(frozen=True)
class SelectionState:
    show_orders_to_ship: bool = False
    show_items_to_ship: bool = False
    selected_order_ids: frozenset[str] = field(default_factory=frozenset)


def _claimed(state: SelectionState, ctx: SelectionContext, *, skip_orders: bool = False, skip_items: bool = False) -> frozenset[str]:
    claimed: frozenset[str] = frozenset()
    if state.show_orders_to_ship and not skip_orders:
        claimed |= ctx.orders_to_ship
    if state.show_items_to_ship and not skip_items:
        claimed |= ctx.orders_to_pick
    return claimed


def _settle(state: SelectionState, ctx: SelectionContext) -> SelectionState:
    if state.show_items_to_ship and ctx.remaining_to_pick == 0:
        state = replace(state, show_items_to_ship=False)
    if state.show_orders_to_ship and not ctx.orders_to_ship <= state.selected_order_ids:
        state = replace(state, selected_order_ids=state.selected_order_ids | ctx.orders_to_ship)
    if state.show_items_to_ship and not ctx.orders_to_pick <= state.selected_order_ids:
        state = replace(state, selected_order_ids=state.selected_order_ids | ctx.orders_to_pick)
    return state


def reduce_selection(state: SelectionState, action: SelectionAction, ctx: SelectionContext) -> SelectionState:
    if isinstance(action, SetShowOrdersToShip):
        if action.checked:
            state = replace(
                state,
                show_orders_to_ship=True,
                selected_order_ids=state.selected_order_ids | ctx.orders_to_ship,
            )
        else:
            keep = _claimed(state, ctx, skip_orders=True)
            state = replace(
                state,
                show_orders_to_ship=False,
                selected_order_ids=state.selected_order_ids - (ctx.orders_to_ship - keep),
            )
        return _settle(state, ctx)

    if isinstance(action, SetShowItemsToShip):
        if action.checked:
            if ctx.remaining_to_pick > 0:
                state = replace(
                    state,
                    show_items_to_ship=True,
                    selected_order_ids=state.selected_order_ids | ctx.orders_to_pick,
                )
        else:
            keep = _claimed(state, ctx, skip_items=True)
            state = replace(
                state,
                show_items_to_ship=False,
                selected_order_ids=state.selected_order_ids - (ctx.orders_to_pick - keep),
            )
        return _settle(state, ctx)

    if isinstance(action, ToggleOrderSelection):
        if action.order_id in state.selected_order_ids:
            state = replace(
                state,
                selected_order_ids=state.selected_order_ids - {action.order_id},
                show_orders_to_ship=state.show_orders_to_ship and action.order_id not in ctx.orders_to_ship,
                show_items_to_ship=state.show_items_to_ship and action.order_id not in ctx.orders_to_pick,
            )
        else:
            state = replace(state, selected_order_ids=state.selected_order_ids | {action.order_id})
        return _settle(state, ctx)

    if isinstance(action, ClearSelection):
        return SelectionState()

    return _settle(state, ctx)
