# fieldstock/modules/transfers/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, desc
from typing import List, Dict, Any, Optional, Iterable
from datetime import datetime

from fieldstock.shared.database.models import TransferRequest
from fieldstock.shared.schemas.enums import TransferStatus


class TransfersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_transfer_request(self, transfer_data: Dict[str, Any], performed_by: str) -> TransferRequest:
        """Agregar solicitud en 'pending' sin commit"""
        transfer = TransferRequest(
            warehouse_id=transfer_data['warehouse_id'],
            technician_id=transfer_data['technician_id'],
            item_type_id=transfer_data['item_type_id'],
            packaging_type=transfer_data['packaging_type'],
            quantity=transfer_data['quantity'],
            performed_by=performed_by,
            notes=transfer_data.get('notes'),
            status=TransferStatus.PENDING.value,
            created_at=transfer_data['created_at']
        )
        self.db.add(transfer)
        self.db.flush()
        return transfer

    def get_by_id(self, transfer_id: int) -> Optional[TransferRequest]:
        return self.db.query(TransferRequest).filter(TransferRequest.id == transfer_id).first()

    def get_by_ids(self, transfer_ids: Iterable[int]) -> List[TransferRequest]:
        return self.db.query(TransferRequest).filter(TransferRequest.id.in_(list(transfer_ids))).all()

    def list_transfers(
        self,
        technician_id: Optional[str] = None,
        warehouse_id: Optional[str] = None,
        status: Optional[str] = None
    ) -> List[TransferRequest]:
        filters = []
        if technician_id:
            filters.append(TransferRequest.technician_id == technician_id)
        if warehouse_id:
            filters.append(TransferRequest.warehouse_id == warehouse_id)
        if status:
            filters.append(TransferRequest.status == status)

        query = self.db.query(TransferRequest)
        if filters:
            query = query.filter(and_(*filters))
        return query.order_by(desc(TransferRequest.created_at), desc(TransferRequest.id)).all()

    def list_processed(
        self,
        technician_id: Optional[str] = None,
        warehouse_id: Optional[str] = None
    ) -> List[TransferRequest]:
        """Solicitudes terminadas en orden de creacion"""
        query = self.db.query(TransferRequest).filter(
            TransferRequest.status != TransferStatus.PENDING.value
        )
        if technician_id:
            query = query.filter(TransferRequest.technician_id == technician_id)
        if warehouse_id:
            query = query.filter(TransferRequest.warehouse_id == warehouse_id)
        return query.order_by(TransferRequest.created_at, TransferRequest.id).all()

    def claim_pending(
        self,
        transfer_id: int,
        new_status: TransferStatus,
        responded_at: datetime,
        rejection_reason: Optional[str] = None
    ) -> Optional[TransferRequest]:
        """
        Transicion pending → terminal con UPDATE condicional.

        Solo una transaccion concurrente puede afectar la fila; las demas ven
        0 filas y reciben None. No hace commit.
        """
        values = {
            TransferRequest.status: new_status.value,
            TransferRequest.responded_at: responded_at,
        }
        if new_status == TransferStatus.REJECTED:
            values[TransferRequest.rejection_reason] = rejection_reason

        updated = self.db.query(TransferRequest).filter(
            and_(
                TransferRequest.id == transfer_id,
                TransferRequest.status == TransferStatus.PENDING.value
            )
        ).update(values, synchronize_session=False)

        if not updated:
            return None

        return self.db.query(TransferRequest).populate_existing().filter(
            TransferRequest.id == transfer_id
        ).first()

    def delete_processed(self, transfer_ids: List[int]) -> int:
        """Borrado fisico de solicitudes terminadas; nunca borra pendientes"""
        return self.db.query(TransferRequest).filter(
            and_(
                TransferRequest.id.in_(transfer_ids),
                TransferRequest.status != TransferStatus.PENDING.value
            )
        ).delete(synchronize_session=False)
