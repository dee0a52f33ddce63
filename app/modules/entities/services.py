import logging
from typing import List, Optional
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from app.core.gateway import DataGateway
from app.core.result import Result, FailureKind
from app.core.utils import dates
from app.modules.entities import schemas
from app.modules.tenders import pipeline
from app.modules.validator import services as validator_services

# Configure logging
logger = logging.getLogger(__name__)

def _stored_followed(gateway: DataGateway, user_id: str) -> List[str]:
    row = gateway.get_user_settings(user_id)
    if row is None or not row.followed_entities:
        return []
    return list(row.followed_entities)

def count_active_tenders(gateway: DataGateway, tax_id: str, today) -> int:
    """
    Tenders of one entity still open for proposals. Query errors propagate to the caller.
    """
    return pipeline.count_active(gateway.get_tenders_by_tax_id(tax_id), today)

def list_entities(gateway: DataGateway) -> Result[list]:
    try:
        return Result.success(gateway.list_entities())
    except SQLAlchemyError as e:
        logger.error(f"Error fetching entities: {str(e)}")
        return Result.failure("Erro ao buscar entidades.")

def get_entity(gateway: DataGateway, tax_id: str, user_id: Optional[str] = None,
               now: Optional[datetime] = None) -> Result[schemas.EntityDetail]:
    try:
        entity = gateway.get_entity(tax_id)
        if entity is None:
            return Result.failure(f"Entity {tax_id} not found", FailureKind.NOT_FOUND)
        followed = _stored_followed(gateway, user_id) if user_id else []
        active_count = count_active_tenders(gateway, entity.tax_id, dates.today(now))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching entity {tax_id}: {str(e)}")
        return Result.failure("Erro ao buscar entidade.")

    return Result.success(schemas.EntityDetail(
        tax_id=entity.tax_id,
        name=entity.name,
        is_followed=entity.tax_id in followed,
        active_count=active_count
    ))

def list_followed(gateway: DataGateway, user_id: str,
                  now: Optional[datetime] = None) -> Result[List[schemas.FollowedEntity]]:
    """
    Followed entities with the number of their active tenders.

    The counts are recomputed on every call, one tender query per entity.
    Followed tax ids with no entity row are left out.

    Args:
        gateway: Data gateway bound to the request session
        user_id: The ID of the user
        now: Reference time, defaults to the current wall-clock time

    Returns:
        Result wrapping the followed entities in the order they were followed
    """
    today = dates.today(now)
    try:
        followed = _stored_followed(gateway, user_id)
        if not followed:
            return Result.success([])
        entities = {entity.tax_id: entity for entity in gateway.get_entities(followed)}
        result = [
            schemas.FollowedEntity(
                tax_id=tax_id,
                name=entities[tax_id].name,
                active_count=count_active_tenders(gateway, tax_id, today)
            )
            for tax_id in followed
            if tax_id in entities
        ]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching followed entities for user {user_id}: {str(e)}")
        return Result.failure("Erro ao buscar entidades seguidas.")

    return Result.success(result)

def follow_entity(gateway: DataGateway, user_id: str, tax_id: str) -> Result[schemas.FollowResponse]:
    """
    Add an entity to the user's followed list. Following an entity twice is
    reported as an informational outcome, not an error.
    """
    tax_id = (tax_id or "").strip()
    if not tax_id:
        return Result.failure("taxId is required", FailureKind.INVALID)

    try:
        entity = gateway.get_entity(tax_id)
        if entity is None:
            return Result.failure(f"Entity {tax_id} not found", FailureKind.NOT_FOUND)

        current = _stored_followed(gateway, user_id)
        if tax_id in current:
            return Result.success(schemas.FollowResponse(
                tax_id=tax_id,
                name=entity.name,
                already_following=True,
                followed_entities=current,
                message="Você já está seguindo esta entidade."
            ))

        updated = current + [tax_id]
        gateway.upsert_user_settings(user_id, followed_entities=updated)
    except SQLAlchemyError as e:
        logger.error(f"Error following entity {tax_id} for user {user_id}: {str(e)}")
        return Result.failure("Erro ao salvar entidade. Tente novamente.")

    logger.info(f"User {user_id} now follows entity {tax_id}")
    return Result.success(schemas.FollowResponse(
        tax_id=tax_id,
        name=entity.name,
        followed_entities=updated,
        message="Entidade adicionada com sucesso!"
    ))

def unfollow_entity(gateway: DataGateway, user_id: str, tax_id: str) -> Result[List[str]]:
    """
    Remove an entity from the user's followed list. Removing one that is not
    followed leaves the list unchanged.
    """
    try:
        current = _stored_followed(gateway, user_id)
        updated = [followed for followed in current if followed != tax_id]
        if updated != current:
            gateway.upsert_user_settings(user_id, followed_entities=updated)
            logger.info(f"User {user_id} stopped following entity {tax_id}")
    except SQLAlchemyError as e:
        logger.error(f"Error unfollowing entity {tax_id} for user {user_id}: {str(e)}")
        return Result.failure("Erro ao deixar de seguir entidade. Tente novamente.")
    return Result.success(updated)

def register_by_tax_id(gateway: DataGateway, user_id: str, tax_id: str) -> Result[schemas.FollowResponse]:
    """
    Validate a tax id with VIES, register the entity if it is new and follow it.
    """
    tax_id = (tax_id or "").strip()
    lookup = validator_services.lookup_tax_id(tax_id)
    if not lookup.ok:
        return lookup

    data = lookup.value or {}
    if not data.get("isValid"):
        return Result.failure("NIPC inválido ou não encontrado na base de dados do VIES.", FailureKind.INVALID)

    try:
        gateway.insert_entity_if_absent(tax_id, data.get("name") or tax_id)
    except SQLAlchemyError as e:
        logger.error(f"Error registering entity {tax_id}: {str(e)}")
        return Result.failure("Erro ao adicionar entidade à base de dados.")

    result = follow_entity(gateway, user_id, tax_id)
    if result.ok and not result.value.already_following:
        result.value.message = f"A entidade {result.value.name} foi adicionada à listagem"
    return result
