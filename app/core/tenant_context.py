# app/core/tenant_context.py
import logging
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.endpoints.auth import AuthenticatedUser, get_current_user
from app.core.database import get_db
from app.models.tenant_global import Tenant, TenantStatus
from app.models.user import User

logger = logging.getLogger(__name__)


class TenantContext:
    """
    The tenant a lifecycle request operates on, plus who asked.

    Always derived from the authenticated user, never from the request body.
    """

    def __init__(self, tenant: Tenant, user: User):
        self.tenant = tenant
        self.user = user

    @property
    def tenant_id(self) -> UUID:
        return self.tenant.id


_STATUS_MESSAGES = {
    TenantStatus.PENDING: "Clinic registration is pending activation. Please contact support.",
    TenantStatus.SUSPENDED: "Clinic account is suspended. Please contact support.",
    TenantStatus.INACTIVE: "Clinic account is inactive. Please contact support.",
}


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def get_tenant_context(
    db: Session = Depends(get_db),
    current: AuthenticatedUser = Depends(get_current_user),
) -> TenantContext:
    """
    403 unless the caller is a tenant user whose token was issued for that
    same tenant and the tenant is ACTIVE.
    """
    user = current.user
    if user.tenant_id is None:
        raise _forbidden("Tenant-scoped operation requires a tenant user.")

    if current.claims.tenant_id != user.tenant_id:
        logger.warning(
            "Token tenant mismatch user=%s token_tenant=%s user_tenant=%s",
            user.id,
            current.claims.tenant_id,
            user.tenant_id,
        )
        raise _forbidden("Token was not issued for this clinic.")

    tenant = db.get(Tenant, user.tenant_id)
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found.",
        )

    if tenant.status != TenantStatus.ACTIVE:
        raise _forbidden(_STATUS_MESSAGES.get(tenant.status, "Clinic account is not active. Please contact support."))

    # Lifecycle services manage their own transactions.
    db.commit()

    return TenantContext(tenant=tenant, user=user)
