# fieldstock/modules/transfers/service.py
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from fieldstock.core.events import event_bus, LedgerChanged, TransferStatusChanged
from fieldstock.core.exceptions import AlreadyProcessed, NotFound, ValidationError
from fieldstock.shared.database.models import ItemType, TransferRequest, utcnow
from fieldstock.shared.database.transaction import transaction
from fieldstock.modules.system_logs.repository import SystemLogsRepository
from fieldstock.shared.schemas.enums import (
    AuditAction, OwnerKind, PackagingRule, PackagingType, TransferStatus
)
from fieldstock.shared.services.ledger_service import LedgerService
from .repository import TransfersRepository
from .schemas import (
    TransferRequestCreate, TransferBatchCreate, TransferResponse,
    TransferActionResponse, TransferBatchResponse, LedgerBalance
)

logger = logging.getLogger(__name__)


class TransfersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TransfersRepository(db)
        self.audit = SystemLogsRepository(db)

    # ==================== VALIDACIONES ====================

    def _validate_line(self, item_type_id: str, packaging_type: PackagingType, quantity: int) -> ItemType:
        """Cantidad positiva, tipo existente y activo, empaque compatible"""
        if quantity is None or quantity <= 0:
            raise ValidationError(
                f"La cantidad debe ser mayor que cero (recibido: {quantity})",
                details={"quantity": quantity}
            )

        item_type = self.db.query(ItemType).filter(ItemType.id == item_type_id).first()
        if not item_type:
            raise ValidationError(
                f"Tipo de producto desconocido: {item_type_id}",
                details={"item_type_id": item_type_id}
            )

        if not item_type.is_active:
            raise ValidationError(
                f"El tipo de producto {item_type_id} esta inactivo",
                details={"item_type_id": item_type_id}
            )

        rule = PackagingRule(item_type.packaging_rule)
        if not rule.allows(PackagingType(packaging_type)):
            raise ValidationError(
                f"{item_type_id} no admite empaque '{PackagingType(packaging_type).value}' "
                f"(regla: {rule.value})",
                details={"item_type_id": item_type_id, "packaging_rule": rule.value}
            )

        return item_type

    def _get_existing(self, transfer_id: int) -> TransferRequest:
        transfer = self.repository.get_by_id(transfer_id)
        if not transfer:
            raise NotFound(f"Transferencia #{transfer_id} no encontrada")
        return transfer

    def _claim(
        self,
        transfer_id: int,
        new_status: TransferStatus,
        rejection_reason: Optional[str] = None
    ) -> TransferRequest:
        """Pasar a estado terminal o fallar con NotFound / AlreadyProcessed"""
        transfer = self.repository.claim_pending(
            transfer_id, new_status, utcnow(), rejection_reason
        )
        if transfer is not None:
            return transfer

        existing = self._get_existing(transfer_id)
        logger.warning(f"❌ Transferencia #{transfer_id} ya procesada: {existing.status}")
        raise AlreadyProcessed(
            f"La transferencia #{transfer_id} ya fue procesada (estado: {existing.status})",
            details={"transfer_id": transfer_id, "status": existing.status}
        )

    # ==================== CREACION ====================

    async def submit(self, data: TransferRequestCreate, performed_by: str) -> TransferResponse:
        """Crear solicitud en 'pending'; el inventario no cambia hasta aceptar"""
        logger.info(f"📦 Creando transferencia - Usuario: {performed_by}")
        logger.info(f"   Producto: {data.item_type_id} ({data.packaging_type.value})")
        logger.info(f"   Cantidad: {data.quantity}")
        logger.info(f"   Bodega: {data.warehouse_id} → Tecnico: {data.technician_id}")

        self._validate_line(data.item_type_id, data.packaging_type, data.quantity)

        transfer_dict = {
            "warehouse_id": data.warehouse_id,
            "technician_id": data.technician_id,
            "item_type_id": data.item_type_id,
            "packaging_type": PackagingType(data.packaging_type).value,
            "quantity": data.quantity,
            "notes": data.notes,
            "created_at": utcnow()
        }

        with transaction(self.db, "crear transferencia"):
            transfer = self.repository.create_transfer_request(transfer_dict, performed_by)

        logger.info(f"✅ Transferencia creada: ID #{transfer.id}")
        event_bus.publish(TransferStatusChanged(transfer.id, transfer.status))
        return TransferResponse.model_validate(transfer)

    async def submit_batch(self, data: TransferBatchCreate, performed_by: str) -> TransferBatchResponse:
        """Varias lineas en una transaccion; si una linea es invalida no se crea ninguna"""
        for line in data.items:
            self._validate_line(line.item_type_id, line.packaging_type, line.quantity)

        created_at = utcnow()
        with transaction(self.db, "crear lote de transferencias"):
            transfers = [
                self.repository.create_transfer_request(
                    {
                        "warehouse_id": data.warehouse_id,
                        "technician_id": data.technician_id,
                        "item_type_id": line.item_type_id,
                        "packaging_type": PackagingType(line.packaging_type).value,
                        "quantity": line.quantity,
                        "notes": data.notes,
                        "created_at": created_at
                    },
                    performed_by
                )
                for line in data.items
            ]

        logger.info(
            f"✅ Lote creado: {len(transfers)} transferencias "
            f"{data.warehouse_id} → {data.technician_id} por {performed_by}"
        )
        for transfer in transfers:
            event_bus.publish(TransferStatusChanged(transfer.id, transfer.status))

        return TransferBatchResponse(
            success=True,
            message=f"{len(transfers)} solicitudes creadas",
            transfers=[TransferResponse.model_validate(t) for t in transfers]
        )

    # ==================== CICLO DE VIDA ====================

    async def accept(self, transfer_id: int, actor_id: Optional[str] = None) -> TransferActionResponse:
        """
        Aceptar solicitud: bodega -cantidad, inventario movil del tecnico +cantidad.

        El cambio de estado y los dos ajustes van en una sola transaccion. Si
        la bodega no alcanza, todo se revierte y la solicitud sigue 'pending'.
        """
        logger.info(f"✅ Aceptando transferencia #{transfer_id} (por {actor_id})")

        with transaction(self.db, f"aceptar transferencia #{transfer_id}"):
            transfer = self._claim(transfer_id, TransferStatus.ACCEPTED)
            packaging_type = PackagingType(transfer.packaging_type)

            warehouse_record = LedgerService.adjust(
                self.db, OwnerKind.WAREHOUSE, transfer.warehouse_id,
                transfer.item_type_id, packaging_type, -transfer.quantity
            )
            technician_record = LedgerService.adjust(
                self.db, OwnerKind.TECHNICIAN_MOVING, transfer.technician_id,
                transfer.item_type_id, packaging_type, transfer.quantity
            )

            ledger = [
                LedgerBalance(
                    owner_kind=OwnerKind.WAREHOUSE.value,
                    owner_id=transfer.warehouse_id,
                    item_type_id=transfer.item_type_id,
                    packaging_type=packaging_type,
                    balance=getattr(warehouse_record, packaging_type.counter)
                ),
                LedgerBalance(
                    owner_kind=OwnerKind.TECHNICIAN_MOVING.value,
                    owner_id=transfer.technician_id,
                    item_type_id=transfer.item_type_id,
                    packaging_type=packaging_type,
                    balance=getattr(technician_record, packaging_type.counter)
                ),
            ]

        logger.info(f"✅ Transferencia #{transfer_id} aceptada - Inventario actualizado")

        event_bus.publish(TransferStatusChanged(transfer.id, transfer.status))
        event_bus.publish(LedgerChanged(OwnerKind.WAREHOUSE.value, transfer.warehouse_id, transfer.item_type_id))
        event_bus.publish(
            LedgerChanged(OwnerKind.TECHNICIAN_MOVING.value, transfer.technician_id, transfer.item_type_id)
        )

        return TransferActionResponse(
            success=True,
            message=f"Transferencia #{transfer_id} aceptada",
            transfer=TransferResponse.model_validate(transfer),
            ledger=ledger
        )

    async def reject(
        self,
        transfer_id: int,
        reason: Optional[str] = None,
        actor_id: Optional[str] = None
    ) -> TransferActionResponse:
        """Rechazar solicitud; nunca toca el inventario"""
        logger.info(f"❌ Rechazando transferencia #{transfer_id} (por {actor_id}): {reason}")

        with transaction(self.db, f"rechazar transferencia #{transfer_id}"):
            transfer = self._claim(transfer_id, TransferStatus.REJECTED, rejection_reason=reason)

        event_bus.publish(TransferStatusChanged(transfer.id, transfer.status))

        return TransferActionResponse(
            success=True,
            message=f"Transferencia #{transfer_id} rechazada",
            transfer=TransferResponse.model_validate(transfer)
        )

    async def bulk_delete(self, transfer_ids: List[int], actor_id: Optional[str] = None) -> List[int]:
        """
        Borrado fisico de solicitudes terminadas (limpieza de auditoria).

        Falla sin borrar nada si algun ID no existe o sigue pendiente.
        """
        ids = list(dict.fromkeys(transfer_ids))
        if not ids:
            raise ValidationError("No se enviaron IDs para borrar")

        with transaction(self.db, "borrar transferencias"):
            found = {transfer.id: transfer for transfer in self.repository.get_by_ids(ids)}

            missing = [transfer_id for transfer_id in ids if transfer_id not in found]
            if missing:
                raise NotFound(
                    f"Transferencias no encontradas: {missing}",
                    details={"missing_ids": missing}
                )

            pending = [t.id for t in found.values() if t.status == TransferStatus.PENDING.value]
            if pending:
                raise ValidationError(
                    f"Las solicitudes pendientes deben resolverse, no borrarse: {sorted(pending)}",
                    details={"pending_ids": sorted(pending)}
                )

            deleted = self.repository.delete_processed(ids)
            if deleted != len(ids):
                # Otra transaccion cambio el conjunto entre la lectura y el borrado
                raise ValidationError(
                    "El conjunto de solicitudes cambio durante el borrado; intente de nuevo"
                )

            self.audit.create(
                actor_id=actor_id or "system",
                action=AuditAction.TRANSFERS_DELETE,
                entity_type="transfer_request",
                entity_id=",".join(str(transfer_id) for transfer_id in ids)[:150],
                description=f"{len(ids)} solicitudes terminadas borradas",
                details={
                    "ids": ids,
                    "statuses": {str(transfer_id): found[transfer_id].status for transfer_id in ids},
                },
                severity="warning"
            )

        logger.info(f"🗑️ Transferencias borradas: {ids}")
        return ids

    # ==================== CONSULTAS ====================

    async def get_transfer(self, transfer_id: int) -> TransferResponse:
        return TransferResponse.model_validate(self._get_existing(transfer_id))

    async def list_transfers(
        self,
        technician_id: Optional[str] = None,
        warehouse_id: Optional[str] = None,
        status: Optional[TransferStatus] = None
    ) -> List[TransferResponse]:
        transfers = self.repository.list_transfers(
            technician_id=technician_id,
            warehouse_id=warehouse_id,
            status=status.value if status else None
        )
        return [TransferResponse.model_validate(t) for t in transfers]
