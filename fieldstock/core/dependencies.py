# fieldstock/core/dependencies.py
from fastapi import Header

from fieldstock.core.exceptions import ValidationError


async def get_current_actor(
    x_actor_id: str = Header(..., alias="X-Actor-Id", description="ID del usuario que ejecuta la accion")
) -> str:
    """
    Usuario que ejecuta la accion.

    La autenticacion vive fuera de este servicio; el gateway propaga el ID
    del usuario autenticado en la cabecera X-Actor-Id.
    """
    actor_id = x_actor_id.strip()
    if not actor_id:
        raise ValidationError("Cabecera X-Actor-Id vacia")
    return actor_id
