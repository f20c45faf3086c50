"""Tests for grouping transfer history into operations."""

import asyncio
import base64
import itertools
import re
from datetime import datetime
from types import SimpleNamespace

import pytest
from dateutil import tz

from fieldstock.core.exceptions import NotFound
from fieldstock.modules.operations.grouping import (
    NO_NOTES, NO_NOTES_COMPONENT, find_operation, group_operations
)
from fieldstock.modules.operations.service import OperationsService, business_zone
from fieldstock.modules.transfers.schemas import TransferBatchCreate, TransferLine
from fieldstock.modules.transfers.service import TransfersService
from fieldstock.shared.schemas.enums import OwnerKind
from fieldstock.shared.services.ledger_service import LedgerService

_ids = itertools.count(1)


def row(**overrides):
    values = dict(
        id=next(_ids),
        warehouse_id="W1",
        technician_id="T1",
        item_type_id="n950",
        packaging_type="box",
        quantity=1,
        performed_by="admin-1",
        status="accepted",
        notes=None,
        rejection_reason=None,
        created_at=datetime(2026, 3, 14, 9, 0),
        responded_at=datetime(2026, 3, 14, 10, 0),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def decode(group_key):
    padding = "=" * (-len(group_key) % 4)
    return base64.urlsafe_b64decode(group_key + padding).decode("utf-8")


class TestGroupOperations:

    def test_rows_sharing_key_form_one_operation(self):
        rows = [
            row(item_type_id="n950", quantity=3),
            row(item_type_id="rollPaper", quantity=2, created_at=datetime(2026, 3, 14, 15, 0)),
            row(item_type_id="stcSim", quantity=5, packaging_type="unit"),
        ]
        operations = group_operations(rows)

        assert len(operations) == 1
        operation = operations[0]
        assert [item.item_type_id for item in operation.items] == ["n950", "rollPaper", "stcSim"]
        assert operation.total_quantity == 10
        assert operation.notes is None
        assert operation.created_at == datetime(2026, 3, 14, 9, 0)

    def test_pending_rows_ignored(self):
        operations = group_operations([row(status="pending"), row()])
        assert len(operations) == 1
        assert len(operations[0].items) == 1

    def test_each_key_field_splits(self):
        base = row()
        others = [
            row(warehouse_id="W2"),
            row(technician_id="T2"),
            row(created_at=datetime(2026, 3, 15, 9, 0)),
            row(performed_by="admin-2"),
            row(status="rejected"),
            row(notes="urgent"),
        ]
        assert len(group_operations([base] + others)) == 7

    def test_missing_notes_use_sentinel(self):
        operations = group_operations([row(notes=None), row(notes="")])
        assert len(operations) == 1
        assert operations[0].notes is None
        assert decode(operations[0].group_key).endswith("|" + NO_NOTES_COMPONENT)

    def test_literal_sentinel_text_is_a_real_note(self):
        operations = group_operations([row(notes=None), row(notes=NO_NOTES)])
        assert len(operations) == 2
        assert [op.notes for op in operations] == [None, NO_NOTES]
        assert operations[0].group_key != operations[1].group_key

    def test_membership_independent_of_order(self):
        rows = [
            row(quantity=1),
            row(quantity=2, technician_id="T2"),
            row(quantity=3),
            row(quantity=4, status="rejected", rejection_reason="damaged"),
            row(quantity=5, technician_id="T2"),
        ]

        def membership(ops):
            return {op.group_key: sorted(item.id for item in op.items) for op in ops}

        expected = membership(group_operations(rows))
        for permutation in itertools.permutations(rows):
            assert membership(group_operations(list(permutation))) == expected

    def test_order_of_first_appearance(self):
        first = row(technician_id="T9")
        second = row(technician_id="T1")
        third = row(technician_id="T9")
        operations = group_operations([first, second, third])
        assert [op.technician_id for op in operations] == ["T9", "T1"]
        assert [item.id for item in operations[0].items] == [first.id, third.id]

    def test_header_fields(self):
        rows = [
            row(status="rejected", rejection_reason=None,
                created_at=datetime(2026, 3, 14, 11, 0), responded_at=datetime(2026, 3, 14, 12, 0)),
            row(status="rejected", rejection_reason="late",
                created_at=datetime(2026, 3, 14, 10, 0), responded_at=datetime(2026, 3, 14, 18, 0)),
            row(status="rejected", rejection_reason="wrong item",
                created_at=datetime(2026, 3, 14, 8, 0), responded_at=datetime(2026, 3, 14, 9, 0)),
        ]
        operation = group_operations(rows)[0]
        assert operation.created_at == datetime(2026, 3, 14, 8, 0)
        assert operation.responded_at == datetime(2026, 3, 14, 18, 0)
        assert operation.rejection_reason == "wrong item"

    def test_day_uses_business_timezone(self):
        late_utc = row(created_at=datetime(2026, 3, 14, 22, 30))
        early_utc = row(created_at=datetime(2026, 3, 14, 1, 0))

        assert len(group_operations([late_utc, early_utc])) == 1

        riyadh = tz.gettz("Asia/Riyadh")
        operations = group_operations([late_utc, early_utc], riyadh)
        assert [op.day.isoformat() for op in operations] == ["2026-03-15", "2026-03-14"]

    def test_separator_in_notes_is_escaped(self):
        operations = group_operations([row(notes="a|b"), row(notes="a")])
        assert len(operations) == 2
        assert decode(operations[0].group_key).count("|") == 5

    def test_group_key_is_url_safe(self):
        operations = group_operations([row(notes="shift | morning / 50% done?"), row(notes="ملاحظة")])
        for operation in operations:
            assert re.fullmatch(r"[A-Za-z0-9_-]+", operation.group_key)

    def test_find_operation(self):
        rows = [row(), row(technician_id="T2")]
        key = group_operations(rows)[1].group_key
        assert find_operation(rows, key).technician_id == "T2"
        assert find_operation(rows, "nope") is None


class TestBusinessZone:

    def test_unknown_name_falls_back_to_utc(self):
        assert business_zone("Not/AZone") == tz.UTC

    def test_known_name(self):
        assert business_zone("Asia/Riyadh") is not None


class TestOperationsService:

    @pytest.fixture
    def history(self, seeded):
        """One accepted batch of three lines and one rejected request."""
        LedgerService.set_absolute(seeded, OwnerKind.WAREHOUSE, "W1", "n950", 10, 0)
        LedgerService.set_absolute(seeded, OwnerKind.WAREHOUSE, "W1", "stickers", 0, 100)
        LedgerService.set_absolute(seeded, OwnerKind.WAREHOUSE, "W1", "zainSim", 5, 0)
        seeded.commit()

        transfers = TransfersService(seeded)
        batch = asyncio.run(transfers.submit_batch(TransferBatchCreate(
            warehouse_id="W1", technician_id="T1", notes="monthly",
            items=[
                TransferLine(item_type_id="n950", packaging_type="box", quantity=2),
                TransferLine(item_type_id="stickers", packaging_type="unit", quantity=40),
                TransferLine(item_type_id="zainSim", packaging_type="box", quantity=1),
            ]
        ), "admin-1"))
        for transfer in batch.transfers:
            asyncio.run(transfers.accept(transfer.id, "admin-1"))

        extra = asyncio.run(transfers.submit_batch(TransferBatchCreate(
            warehouse_id="W1", technician_id="T2",
            items=[TransferLine(item_type_id="n950", packaging_type="box", quantity=1)]
        ), "admin-1"))
        asyncio.run(transfers.reject(extra.transfers[0].id, "not today"))

        asyncio.run(transfers.submit_batch(TransferBatchCreate(
            warehouse_id="W1", technician_id="T1",
            items=[TransferLine(item_type_id="n950", packaging_type="box", quantity=1)]
        ), "admin-1"))
        return seeded

    def test_list_operations(self, history):
        operations = asyncio.run(OperationsService(history, tz.UTC).list_operations())

        assert len(operations) == 2
        accepted = operations[0]
        assert accepted.status == "accepted"
        assert accepted.notes == "monthly"
        assert len(accepted.items) == 3
        assert accepted.total_quantity == 43
        assert operations[1].rejection_reason == "not today"

    def test_filters(self, history):
        service = OperationsService(history, tz.UTC)
        operations = asyncio.run(service.list_operations(technician_id="T2"))
        assert [op.technician_id for op in operations] == ["T2"]

    def test_get_operation(self, history):
        service = OperationsService(history, tz.UTC)
        key = asyncio.run(service.list_operations())[0].group_key
        operation = asyncio.run(service.get_operation(key))
        assert len(operation.items) == 3

    def test_get_missing_operation(self, history):
        with pytest.raises(NotFound):
            asyncio.run(OperationsService(history, tz.UTC).get_operation("W1|T1|2000-01-01|x|accepted|*no-notes"))
