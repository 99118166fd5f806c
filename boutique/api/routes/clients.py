"""
api/routes/clients.py
---------------------
Client endpoints, scoped to the caller's societe.

POST /api/clients/{id}/commandes bumps the client's order counter.
"""

from fastapi import APIRouter, HTTPException, Query, Response, status

from boutique.dependencies import DbSession, TenantId
from boutique.schemas.base import MessageResponse
from boutique.schemas.client import ClientCreate, ClientRead, ClientUpdate
from boutique.services.client_service import ClientService

router = APIRouter(prefix="/api/clients", tags=["Clients"])


def _not_found(id_client: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Client avec l'ID {id_client} introuvable.",
    )


@router.get("", response_model=list[ClientRead], summary="List clients")
async def list_clients(
    db: DbSession,
    id_societe: TenantId,
    include_inactive: bool = Query(False, alias="includeInactive"),
) -> list[ClientRead]:
    return await ClientService.list_clients(db, id_societe, include_inactive)


@router.get("/{id_client}", response_model=ClientRead, summary="Get a client")
async def get_client(id_client: int, db: DbSession, id_societe: TenantId) -> ClientRead:
    client = await ClientService.get_client(db, id_societe, id_client)
    if client is None:
        raise _not_found(id_client)
    return client


@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a client",
)
async def create_client(
    body: ClientCreate, response: Response, db: DbSession, id_societe: TenantId
) -> ClientRead:
    client = await ClientService.create_client(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{client.id_client}"
    return client


@router.put("/{id_client}", response_model=ClientRead, summary="Update a client")
async def update_client(
    id_client: int, body: ClientUpdate, db: DbSession, id_societe: TenantId
) -> ClientRead:
    client = await ClientService.update_client(db, id_societe, id_client, body)
    if client is None:
        raise _not_found(id_client)
    return client


@router.delete("/{id_client}", response_model=MessageResponse, summary="Delete a client")
async def delete_client(id_client: int, db: DbSession, id_societe: TenantId) -> MessageResponse:
    if not await ClientService.delete_client(db, id_societe, id_client):
        raise _not_found(id_client)
    return MessageResponse(message="Client supprimé avec succès.")


@router.patch("/{id_client}/actif", response_model=ClientRead, summary="Toggle a client's active flag")
async def toggle_client_status(id_client: int, db: DbSession, id_societe: TenantId) -> ClientRead:
    if not await ClientService.toggle_client_status(db, id_societe, id_client):
        raise _not_found(id_client)
    return await ClientService.get_client(db, id_societe, id_client)


@router.post(
    "/{id_client}/commandes",
    response_model=ClientRead,
    summary="Increment a client's order counter",
)
async def increment_total_commandes(
    id_client: int, db: DbSession, id_societe: TenantId
) -> ClientRead:
    if not await ClientService.increment_total_commandes(db, id_societe, id_client):
        raise _not_found(id_client)
    return await ClientService.get_client(db, id_societe, id_client)
