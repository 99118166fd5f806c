"""
api/routes/configurations.py
----------------------------
Per-societe configuration documents.

GET  /api/configurations/cle/{cle}       — Lookup by key.
POST /api/configurations/validate-json   — Syntax check only, nothing stored.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from boutique.dependencies import DbSession, TenantId, get_tenant_context
from boutique.schemas.base import MessageResponse
from boutique.schemas.configuration import (
    ConfigurationCreate,
    ConfigurationRead,
    ConfigurationUpdate,
    ValidateJsonRequest,
    ValidateJsonResponse,
)
from boutique.services.configuration_service import ConfigurationService

router = APIRouter(prefix="/api/configurations", tags=["Configurations"])


def _not_found(id_configuration: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Configuration avec l'ID {id_configuration} introuvable.",
    )


@router.get("", response_model=list[ConfigurationRead], summary="List configurations")
async def list_configurations(db: DbSession, id_societe: TenantId) -> list[ConfigurationRead]:
    return await ConfigurationService.list_configurations(db, id_societe)


@router.get("/cle/{cle}", response_model=ConfigurationRead, summary="Get a configuration by key")
async def get_configuration_by_cle(
    cle: str, db: DbSession, id_societe: TenantId
) -> ConfigurationRead:
    configuration = await ConfigurationService.get_configuration_by_cle(db, id_societe, cle)
    if configuration is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Configuration avec la clé '{cle}' introuvable.",
        )
    return configuration


@router.post(
    "/validate-json",
    response_model=ValidateJsonResponse,
    summary="Check that a string is valid JSON",
    dependencies=[Depends(get_tenant_context)],
)
async def validate_json(body: ValidateJsonRequest) -> ValidateJsonResponse:
    is_valid = ConfigurationService.validate_json(body.json_text)
    return ValidateJsonResponse(
        is_valid=is_valid,
        message="Le JSON est valide" if is_valid else "Le JSON est invalide",
    )


@router.get(
    "/{id_configuration}", response_model=ConfigurationRead, summary="Get a configuration"
)
async def get_configuration(
    id_configuration: int, db: DbSession, id_societe: TenantId
) -> ConfigurationRead:
    configuration = await ConfigurationService.get_configuration(db, id_societe, id_configuration)
    if configuration is None:
        raise _not_found(id_configuration)
    return configuration


@router.post(
    "",
    response_model=ConfigurationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a configuration",
)
async def create_configuration(
    body: ConfigurationCreate, response: Response, db: DbSession, id_societe: TenantId
) -> ConfigurationRead:
    configuration = await ConfigurationService.create_configuration(db, id_societe, body)
    response.headers["Location"] = f"{router.prefix}/{configuration.id_configuration}"
    return configuration


@router.put(
    "/{id_configuration}", response_model=ConfigurationRead, summary="Update a configuration"
)
async def update_configuration(
    id_configuration: int, body: ConfigurationUpdate, db: DbSession, id_societe: TenantId
) -> ConfigurationRead:
    configuration = await ConfigurationService.update_configuration(
        db, id_societe, id_configuration, body
    )
    if configuration is None:
        raise _not_found(id_configuration)
    return configuration


@router.delete(
    "/{id_configuration}", response_model=MessageResponse, summary="Delete a configuration"
)
async def delete_configuration(
    id_configuration: int, db: DbSession, id_societe: TenantId
) -> MessageResponse:
    if not await ConfigurationService.delete_configuration(db, id_societe, id_configuration):
        raise _not_found(id_configuration)
    return MessageResponse(message="Configuration supprimée avec succès.")
