from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from pickops.core.config import get_settings
from pickops.core.logging import configure_logging
from pickops.domain.orders.aggregates import Order
from pickops.domain.warehouses.aggregates import Warehouse
from pickops.persistence.pg import init_db, session_scope
from pickops.persistence.state_store import build_key_value_store
from pickops.picking.limiter import LimiterPreferences
from pickops.picking.progress import ProgressTracker
from pickops.picking.workflow import PickingWorkflow
from pickops.returns.address import resolve_return_address


def _load_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _load_orders(path: str) -> list[Order]:
    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("orders", [])
    orders: list[Order] = []
    for index, row in enumerate(data):
        if not isinstance(row, dict) or not row.get("id"):
            raise ValueError(f"orders[{index}] is missing an id")
        orders.append(Order.from_dict(row))
    return orders


def _print(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="pickops CLI")
    top = parser.add_subparsers(dest="command", required=True)

    picklist = top.add_parser("picklist", help="Build the consolidated pick list for a warehouse")
    picklist.add_argument("--orders", required=True, help="JSON file with an order list or {'orders': [...]}")
    picklist.add_argument("--warehouse", required=True, help="JSON file with the warehouse record")
    picklist.add_argument("--limit", default=None, help="all | <n> | custom:<n> (default: saved preference)")
    picklist.add_argument("--select", action="append", default=[], help="Order id to pick; repeatable")

    state = top.add_parser("state", help="Picking progress maintenance")
    state_sub = state.add_subparsers(dest="state_command", required=True)
    for name, help_text in (("show", "Print picked SKUs and packed orders"), ("clear", "Reset picking progress")):
        cmd = state_sub.add_parser(name, help=help_text)
        cmd.add_argument("warehouse_id")
    toggle_item = state_sub.add_parser("toggle-item", help="Toggle a SKU as picked")
    toggle_item.add_argument("warehouse_id")
    toggle_item.add_argument("sku")
    toggle_order = state_sub.add_parser("toggle-order", help="Toggle an order as packed")
    toggle_order.add_argument("warehouse_id")
    toggle_order.add_argument("order_id")

    limit = top.add_parser("limit", help="Saved picking order limit")
    limit_sub = limit.add_subparsers(dest="limit_command", required=True)
    show_limit = limit_sub.add_parser("show")
    show_limit.add_argument("warehouse_id")
    set_limit = limit_sub.add_parser("set")
    set_limit.add_argument("warehouse_id")
    set_limit.add_argument("value", help="all | <n> | custom:<n>")

    return_address = top.add_parser("return-address", help="Resolve the return address for a label")
    return_address.add_argument("--warehouse", required=True, help="JSON file with the warehouse record")
    return_address.add_argument("--order", default=None, help="JSON file with the order")

    return parser


def _run_picklist(args: argparse.Namespace) -> int:
    warehouse = Warehouse.from_dict(_load_json(args.warehouse))
    orders = _load_orders(args.orders)
    settings = get_settings()

    with session_scope() as session:
        store = build_key_value_store(session=session, settings=settings)
        tracker = ProgressTracker(store, namespace=settings.state_namespace)
        prefs = LimiterPreferences(store, default=settings.default_picking_limit, namespace=settings.state_namespace)
        limiter = args.limit if args.limit is not None else prefs.load(warehouse.id)
        snapshot = PickingWorkflow(tracker).snapshot(
            warehouse.id,
            orders,
            warehouse.fulfillment_rules,
            limiter=limiter,
            selected_order_ids=args.select,
        )
        _print(snapshot.to_dict())
    return 0


def _run_state(args: argparse.Namespace) -> int:
    settings = get_settings()
    with session_scope() as session:
        tracker = ProgressTracker(build_key_value_store(session=session, settings=settings), settings.state_namespace)
        if args.state_command == "show":
            state = tracker.load(args.warehouse_id)
        elif args.state_command == "toggle-item":
            state = tracker.toggle_item_picked(args.warehouse_id, args.sku)
        elif args.state_command == "toggle-order":
            state = tracker.toggle_order_packed(args.warehouse_id, args.order_id)
        else:
            state = tracker.clear(args.warehouse_id)
        _print(state.to_dict())
    return 0


def _run_limit(args: argparse.Namespace) -> int:
    settings = get_settings()
    with session_scope() as session:
        prefs = LimiterPreferences(
            build_key_value_store(session=session, settings=settings),
            default=settings.default_picking_limit,
            namespace=settings.state_namespace,
        )
        if args.limit_command == "set":
            cfg = prefs.save(args.warehouse_id, args.value)
        else:
            cfg = prefs.load(args.warehouse_id)
        _print({"warehouse_id": args.warehouse_id, "limit": cfg.serialize(), "value": cfg.effective_limit})
    return 0


def _run_return_address(args: argparse.Namespace) -> int:
    warehouse = Warehouse.from_dict(_load_json(args.warehouse))
    order = Order.from_dict(_load_json(args.order)) if args.order else None
    _print(resolve_return_address(warehouse, order).model_dump())
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "return-address":
        return _run_return_address(args)

    init_db()
    if args.command == "picklist":
        try:
            return _run_picklist(args)
        except ValueError as exc:
            parser.error(str(exc))
    if args.command == "state":
        return _run_state(args)
    if args.command == "limit":
        return _run_limit(args)

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
