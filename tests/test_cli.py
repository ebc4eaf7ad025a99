from __future__ import annotations

import json

import pytest

from pickops.cli import main


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_picklist_command(tmp_path, capsys):
    orders = _write(
        tmp_path / "orders.json",
        {
            "orders": [
                {"id": "o1", "status": "PENDING", "itemCount": 2, "items": [{"sku": "A", "name": "Alpha", "quantity": 2}]},
                {"id": "o2", "status": "PENDING", "itemCount": 1, "items": [{"sku": "A", "name": "Alpha", "quantity": 1}]},
                {"id": "o3", "status": "SHIPPED", "itemCount": 5, "items": [{"sku": "B", "name": "Beta", "quantity": 5}]},
            ]
        },
    )
    warehouse = _write(tmp_path / "warehouse.json", {"id": "wh-cli", "name": "CLI Warehouse"})

    assert main(["picklist", "--orders", orders, "--warehouse", warehouse, "--limit", "5"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["consolidated_items"] == [
        {
            "sku": "A",
            "name": "Alpha",
            "total_quantity": 3,
            "location": None,
            "orders": [
                {"order_id": "o1", "order_number": "o1", "quantity": 2},
                {"order_id": "o2", "order_number": "o2", "quantity": 1},
            ],
        }
    ]
    assert payload["summary"]["total_units"] == 3


def test_state_commands(capsys):
    assert main(["state", "toggle-item", "wh-cli-state", "SKU-1"]) == 0
    assert json.loads(capsys.readouterr().out)["picked_skus"] == ["SKU-1"]

    assert main(["state", "show", "wh-cli-state"]) == 0
    assert json.loads(capsys.readouterr().out)["picked_skus"] == ["SKU-1"]

    assert main(["state", "clear", "wh-cli-state"]) == 0
    assert json.loads(capsys.readouterr().out)["picked_skus"] == []


def test_limit_commands(capsys):
    assert main(["limit", "set", "wh-cli-limit", "custom:12"]) == 0
    assert json.loads(capsys.readouterr().out)["limit"] == "custom:12"

    assert main(["limit", "show", "wh-cli-limit"]) == 0
    assert json.loads(capsys.readouterr().out)["value"] == 12


def test_return_address_command(tmp_path, capsys):
    warehouse = _write(
        tmp_path / "warehouse.json",
        {"id": "wh-1", "name": "Dock", "code": "D1", "address": {"name": "[code] Returns", "address1": "1 St"}},
    )
    order = _write(tmp_path / "order.json", {"id": "o1"})

    assert main(["return-address", "--warehouse", warehouse, "--order", order]) == 0
    assert json.loads(capsys.readouterr().out)["display_name"] == "D1 Returns"


def test_picklist_rejects_orders_without_id(tmp_path, capsys):
    orders = _write(tmp_path / "orders.json", [{"status": "PENDING"}])
    warehouse = _write(tmp_path / "warehouse.json", {"id": "wh-cli", "name": "CLI Warehouse"})

    with pytest.raises(SystemExit) as exc:
        main(["picklist", "--orders", orders, "--warehouse", warehouse])
    assert exc.value.code == 2
    assert "orders[0] is missing an id" in capsys.readouterr().err
