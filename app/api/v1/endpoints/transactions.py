# app/api/v1/endpoints/transactions.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.tenant_context import TenantContext, get_tenant_context
from app.schemas.lifecycle import LifecycleErrorResponse, ResetAllResponse, SeedResponse
from app.services.count_snapshot_service import snapshot_to_payload
from app.services.purge_service import reset_tenant
from app.services.seed_service import seed_tenant

logger = logging.getLogger(__name__)

router = APIRouter()

settings = get_settings()

_ERROR_RESPONSES = {
    409: {"model": LifecycleErrorResponse, "description": "A reset or seed is already running for this tenant."},
    500: {"model": LifecycleErrorResponse, "description": "The operation failed and was rolled back."},
}


@router.delete(
    "/reset-all",
    response_model=ResetAllResponse,
    responses=_ERROR_RESPONSES,
)
def reset_all(
    db: Session = Depends(get_db),
    ctx: TenantContext = Depends(get_tenant_context),
) -> ResetAllResponse:
    """
    Delete every record of the current tenant (users and the tenant itself stay).

    All-or-nothing: if any step fails nothing is deleted.
    """
    logger.info("reset-all requested tenant=%s user=%s", ctx.tenant_id, ctx.user.id)
    result = reset_tenant(db, ctx.tenant_id, settings=settings)

    return ResetAllResponse(
        message=f"Deleted {result.total_deleted} records.",
        deleted=snapshot_to_payload(result.deleted),
        remaining=snapshot_to_payload(result.remaining),
    )


@router.post(
    "/seed",
    response_model=SeedResponse,
    responses=_ERROR_RESPONSES,
)
def seed(
    db: Session = Depends(get_db),
    ctx: TenantContext = Depends(get_tenant_context),
) -> SeedResponse:
    """
    Replace the current tenant's data with a fresh demo dataset.
    """
    logger.info("seed requested tenant=%s user=%s", ctx.tenant_id, ctx.user.id)
    result = seed_tenant(db, ctx.tenant_id, settings=settings)

    return SeedResponse(created=snapshot_to_payload(result.created))
