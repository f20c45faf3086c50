# fieldstock/modules/operations/grouping.py
"""
Motor de agrupacion de operaciones.

Clave: (warehouse_id, technician_id, dia calendario de created_at, performed_by,
status, notas o el centinela NO_NOTES). Las filas pendientes se ignoran.
Notas vacias y ausentes son equivalentes; una nota con el texto "no-notes"
es una nota real y forma su propio grupo.

group_key es opaca y segura para URL: los componentes se codifican con
percent-encoding, se unen con "|" y el resultado va en base64 URL-safe sin
relleno.

La pertenencia a cada grupo no depende del orden de entrada; dentro de un
grupo los items conservan el orden de entrada. Dos acciones distintas que
coinciden en todos los campos de la clave quedan en la misma operacion.
"""
import base64
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from dateutil import tz

NO_NOTES = "no-notes"
KEY_SEPARATOR = "|"

# quote() nunca emite "*", asi que ninguna nota real produce este componente
NO_NOTES_COMPONENT = "*" + NO_NOTES


@dataclass(frozen=True)
class OperationKey:
    warehouse_id: str
    technician_id: str
    day: date
    performed_by: str
    status: str
    notes: Optional[str]

    def as_string(self) -> str:
        parts = [
            quote(str(part), safe="")
            for part in (
                self.warehouse_id, self.technician_id, self.day.isoformat(),
                self.performed_by, self.status,
            )
        ]
        parts.append(NO_NOTES_COMPONENT if self.notes is None else quote(self.notes, safe=""))
        raw = KEY_SEPARATOR.join(parts)
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


@dataclass
class OperationItem:
    id: int
    item_type_id: str
    packaging_type: str
    quantity: int


@dataclass
class Operation:
    group_key: str
    warehouse_id: str
    technician_id: str
    day: date
    performed_by: str
    status: str
    notes: Optional[str]
    created_at: datetime
    responded_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    items: List[OperationItem] = field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


def calendar_day(moment: datetime, zone: Optional[tzinfo] = None) -> date:
    """Dia calendario en `zone`; los datetime sin tzinfo se tratan como UTC"""
    if zone is None:
        return moment.date()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz.UTC)
    return moment.astimezone(zone).date()


def operation_key(transfer, zone: Optional[tzinfo] = None) -> OperationKey:
    return OperationKey(
        warehouse_id=transfer.warehouse_id,
        technician_id=transfer.technician_id,
        day=calendar_day(transfer.created_at, zone),
        performed_by=transfer.performed_by,
        status=transfer.status,
        notes=transfer.notes or None,
    )


def _sort_position(transfer) -> Tuple[datetime, int]:
    return transfer.created_at.replace(tzinfo=None), transfer.id or 0


def group_operations(transfers: Iterable, zone: Optional[tzinfo] = None) -> List[Operation]:
    """
    Agrupar filas de transferencias terminadas en operaciones.

    Las operaciones salen en orden de primera aparicion. Los campos de cabecera
    que varian dentro de un grupo se eligen sin depender del orden: created_at
    minimo, responded_at maximo, y el motivo de rechazo de la fila mas antigua
    que lo tenga.
    """
    groups: Dict[OperationKey, Operation] = {}
    members: Dict[OperationKey, list] = {}

    for transfer in transfers:
        if transfer.status == "pending":
            continue

        key = operation_key(transfer, zone)
        operation = groups.get(key)
        if operation is None:
            operation = Operation(
                group_key=key.as_string(),
                warehouse_id=key.warehouse_id,
                technician_id=key.technician_id,
                day=key.day,
                performed_by=key.performed_by,
                status=key.status,
                notes=key.notes,
                created_at=transfer.created_at,
            )
            groups[key] = operation
            members[key] = []

        operation.items.append(OperationItem(
            id=transfer.id,
            item_type_id=transfer.item_type_id,
            packaging_type=transfer.packaging_type,
            quantity=transfer.quantity,
        ))
        members[key].append(transfer)

    for key, operation in groups.items():
        rows = members[key]
        operation.created_at = min(row.created_at for row in rows)
        responded = [row.responded_at for row in rows if row.responded_at is not None]
        operation.responded_at = max(responded) if responded else None
        with_reason = sorted(
            (row for row in rows if row.rejection_reason),
            key=_sort_position
        )
        operation.rejection_reason = with_reason[0].rejection_reason if with_reason else None

    return list(groups.values())


def find_operation(transfers: Iterable, group_key: str, zone: Optional[tzinfo] = None) -> Optional[Operation]:
    for operation in group_operations(transfers, zone):
        if operation.group_key == group_key:
            return operation
    return None
