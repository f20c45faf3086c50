"""Tests for domain events published after ledger writes."""

import asyncio

import pytest

from fieldstock.core.events import EventBus, LedgerChanged, TransferStatusChanged, event_bus
from fieldstock.core.exceptions import InsufficientStock
from fieldstock.modules.inventory.schemas import SetInventoryRequest, StockTransferRequest
from fieldstock.modules.inventory.service import InventoryService
from fieldstock.modules.transfers.schemas import TransferRequestCreate
from fieldstock.modules.transfers.service import TransfersService
from fieldstock.shared.schemas.enums import OwnerKind


@pytest.fixture
def received():
    events = []
    event_bus.subscribe(LedgerChanged, events.append)
    event_bus.subscribe(TransferStatusChanged, events.append)
    return events


def submit(db, quantity=2):
    return asyncio.run(TransfersService(db).submit(TransferRequestCreate(
        warehouse_id="W1", technician_id="T1", item_type_id="n950",
        packaging_type="box", quantity=quantity
    ), "admin-1"))


class TestEventBus:

    def test_failing_subscriber_does_not_stop_others(self):
        bus = EventBus()
        seen = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(LedgerChanged, broken)
        bus.subscribe(LedgerChanged, seen.append)
        bus.publish(LedgerChanged("warehouse", "W1", "n950"))
        assert len(seen) == 1

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        bus.subscribe(LedgerChanged, seen.append)
        bus.unsubscribe(LedgerChanged, seen.append)
        bus.publish(LedgerChanged("warehouse", "W1", "n950"))
        assert seen == []


class TestPublishedEvents:

    def test_accept_publishes_both_sides(self, seeded, received):
        asyncio.run(InventoryService(seeded).set_inventory(
            OwnerKind.WAREHOUSE, "W1", "n950", SetInventoryRequest(boxes=5, units=0), "admin-1"
        ))
        transfer = submit(seeded)
        received.clear()

        asyncio.run(TransfersService(seeded).accept(transfer.id))

        assert TransferStatusChanged(transfer.id, "accepted") in received
        assert LedgerChanged("warehouse", "W1", "n950") in received
        assert LedgerChanged("technician_moving", "T1", "n950") in received

    def test_failed_accept_publishes_nothing(self, seeded, received):
        transfer = submit(seeded, quantity=4)
        received.clear()

        with pytest.raises(InsufficientStock):
            asyncio.run(TransfersService(seeded).accept(transfer.id))
        assert received == []

    def test_technician_stock_transfer(self, seeded, received):
        service = InventoryService(seeded)
        asyncio.run(service.set_inventory(
            OwnerKind.TECHNICIAN_FIXED, "T1", "stcSim", SetInventoryRequest(boxes=0, units=20), "admin-1"
        ))
        received.clear()

        response = asyncio.run(service.transfer_technician_stock("T1", StockTransferRequest(
            item_type_id="stcSim", packaging_type="unit", quantity=8,
            from_inventory="fixed", to_inventory="moving"
        ), "T1"))

        assert (response.from_balance, response.to_balance) == (12, 8)
        assert received == [
            LedgerChanged("technician_fixed", "T1", "stcSim"),
            LedgerChanged("technician_moving", "T1", "stcSim"),
        ]
