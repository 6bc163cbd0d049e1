# api/credential.py
"""
Credential API
Reports and replaces the generation-service API key. The key itself is never returned.
"""

from fastapi import APIRouter, Depends

from ..agents.concierge_service import ConciergeService, get_concierge
from ..schemas.ai_schemas import CredentialStatus, CredentialUpdate


router = APIRouter(prefix="/api/concierge/credential", tags=["Concierge Credential"])


def _status(concierge: ConciergeService) -> CredentialStatus:
    return CredentialStatus(
        configured=concierge.credential_configured,
        source=concierge.credentials.source,
    )


@router.get("", response_model=CredentialStatus)
async def get_credential_status(concierge: ConciergeService = Depends(get_concierge)):
    return _status(concierge)


@router.put("", response_model=CredentialStatus)
async def update_credential(request: CredentialUpdate, concierge: ConciergeService = Depends(get_concierge)):
    """An empty key clears the credential; every generator then returns its fallback"""
    concierge.set_credential(request.api_key)
    return _status(concierge)
