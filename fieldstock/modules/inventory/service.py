# fieldstock/modules/inventory/service.py
from typing import Dict, List
from sqlalchemy.orm import Session
import logging

from fieldstock.core.events import event_bus, LedgerChanged
from fieldstock.core.exceptions import ValidationError
from fieldstock.shared.database.transaction import transaction
from fieldstock.modules.system_logs.repository import SystemLogsRepository
from fieldstock.shared.schemas.enums import AuditAction, OwnerKind, PackagingRule, PackagingType
from fieldstock.shared.services.ledger_service import LedgerService
from .schemas import (
    InventoryEntry, OwnerInventoryResponse, SetInventoryRequest,
    StockTransferRequest, StockTransferResponse
)

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, db: Session):
        self.db = db
        self.audit = SystemLogsRepository(db)

    async def get_owner_inventory(self, owner_kind: OwnerKind, owner_id: str) -> OwnerInventoryResponse:
        """Inventario actual de un owner con la regla de fallback legacy"""
        items: List[InventoryEntry] = []
        for item_type, entry in LedgerService.snapshot(self.db, owner_kind, owner_id):
            items.append(InventoryEntry(
                item_type_id=item_type.id,
                name_local=item_type.name_local,
                name_alt=item_type.name_alt,
                category=item_type.category,
                packaging_rule=item_type.packaging_rule,
                units_per_box=item_type.units_per_box,
                is_active=item_type.is_active,
                boxes=entry.boxes,
                units=entry.units,
                total_units=item_type.total_units(entry.boxes, entry.units),
                source=entry.source
            ))

        return OwnerInventoryResponse(
            success=True,
            message=f"Inventario de {owner_kind.value} {owner_id}",
            owner_kind=owner_kind,
            owner_id=owner_id,
            items=items,
            total_boxes=sum(item.boxes for item in items),
            total_units=sum(item.total_units for item in items)
        )

    async def set_inventory(
        self,
        owner_kind: OwnerKind,
        owner_id: str,
        item_type_id: str,
        data: SetInventoryRequest,
        actor_id: str
    ) -> OwnerInventoryResponse:
        """Edicion manual (override administrativo)"""
        logger.info(
            f"🛠️ Edicion manual por {actor_id}: {owner_kind.value}/{owner_id} {item_type_id} "
            f"boxes={data.boxes} units={data.units}"
        )
        with transaction(self.db, "editar inventario"):
            before = LedgerService.get(self.db, owner_kind, owner_id, item_type_id)
            LedgerService.set_absolute(
                self.db, owner_kind, owner_id, item_type_id, data.boxes, data.units
            )
            self.audit.create(
                actor_id=actor_id,
                action=AuditAction.INVENTORY_SET,
                entity_type=owner_kind.value,
                entity_id=owner_id,
                description=f"Edicion manual de {item_type_id}",
                details={
                    "item_type_id": item_type_id,
                    "before": {"boxes": before.boxes, "units": before.units, "source": before.source},
                    "after": {"boxes": data.boxes, "units": data.units},
                }
            )

        event_bus.publish(LedgerChanged(owner_kind.value, owner_id, item_type_id))
        return await self.get_owner_inventory(owner_kind, owner_id)

    async def set_legacy_inventory(
        self,
        owner_kind: OwnerKind,
        owner_id: str,
        fields: Dict[str, int],
        actor_id: str
    ) -> OwnerInventoryResponse:
        """Importar el registro agregado legacy de un owner"""
        if not fields:
            raise ValidationError("No se enviaron campos legacy")

        logger.info(f"📥 Importando inventario legacy por {actor_id}: {owner_kind.value}/{owner_id}")
        with transaction(self.db, "importar inventario legacy"):
            before = LedgerService.legacy_values(self.db, owner_kind, owner_id, fields)
            LedgerService.set_legacy(self.db, owner_kind, owner_id, fields)
            self.audit.create(
                actor_id=actor_id,
                action=AuditAction.LEGACY_IMPORT,
                entity_type=owner_kind.value,
                entity_id=owner_id,
                description=f"Importacion legacy ({len(fields)} campos)",
                details={"before": before, "after": dict(fields)}
            )

        return await self.get_owner_inventory(owner_kind, owner_id)

    async def transfer_technician_stock(
        self,
        technician_id: str,
        data: StockTransferRequest,
        actor_id: str
    ) -> StockTransferResponse:
        """
        Mover stock entre el inventario fijo y el movil de un mismo tecnico.

        No pasa por aprobacion; ambas partes se aplican en una sola transaccion.
        """
        item_type = LedgerService.get_item_type(self.db, data.item_type_id)
        if not PackagingRule(item_type.packaging_rule).allows(data.packaging_type):
            raise ValidationError(
                f"{item_type.id} no admite empaque '{data.packaging_type.value}' "
                f"(regla: {item_type.packaging_rule})"
            )

        source_kind = data.from_inventory.owner_kind
        target_kind = data.to_inventory.owner_kind

        logger.info(
            f"🔄 Transferencia interna tecnico {technician_id}: {data.quantity} {data.packaging_type.value} "
            f"{data.item_type_id} {data.from_inventory.value} → {data.to_inventory.value} (por {actor_id})"
        )

        with transaction(self.db, "transferencia interna de tecnico"):
            source = LedgerService.adjust(
                self.db, source_kind, technician_id, data.item_type_id,
                data.packaging_type, -data.quantity
            )
            target = LedgerService.adjust(
                self.db, target_kind, technician_id, data.item_type_id,
                data.packaging_type, data.quantity
            )
            counter = PackagingType(data.packaging_type).counter
            from_balance = getattr(source, counter)
            to_balance = getattr(target, counter)
            self.audit.create(
                actor_id=actor_id,
                action=AuditAction.STOCK_TRANSFER,
                entity_type="technician",
                entity_id=technician_id,
                description=(
                    f"{data.quantity} {data.packaging_type.value} {data.item_type_id} "
                    f"{data.from_inventory.value} → {data.to_inventory.value}"
                ),
                details={
                    "item_type_id": data.item_type_id,
                    "packaging_type": data.packaging_type.value,
                    "quantity": data.quantity,
                    "from_inventory": data.from_inventory.value,
                    "to_inventory": data.to_inventory.value,
                    "from_balance": from_balance,
                    "to_balance": to_balance,
                }
            )

        event_bus.publish(LedgerChanged(source_kind.value, technician_id, data.item_type_id))
        event_bus.publish(LedgerChanged(target_kind.value, technician_id, data.item_type_id))

        return StockTransferResponse(
            success=True,
            message="Transferencia interna completada",
            technician_id=technician_id,
            item_type_id=data.item_type_id,
            packaging_type=data.packaging_type,
            quantity=data.quantity,
            from_inventory=data.from_inventory,
            to_inventory=data.to_inventory,
            from_balance=from_balance,
            to_balance=to_balance
        )
