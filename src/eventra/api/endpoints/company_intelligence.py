"""Company intelligence endpoints - per-user profile used as AI prompt context"""
from fastapi import APIRouter, HTTPException

from src.eventra.api.deps import DbSession, CurrentUser
from src.eventra.schemas.company_intelligence import CompanyIntelligenceUpdate, CompanyIntelligenceResponse
from src.eventra.services.company_context import get_company_intelligence, save_company_intelligence

router = APIRouter(prefix="/api/company-intelligence", tags=["Company Intelligence"])


@router.get("", response_model=CompanyIntelligenceResponse)
def get_profile(db: DbSession, user: CurrentUser):
    intel = get_company_intelligence(db, user.id)
    if not intel:
        raise HTTPException(status_code=404, detail="Company intelligence not found")
    return intel


@router.put("", response_model=CompanyIntelligenceResponse)
def save_profile(db: DbSession, user: CurrentUser, data: CompanyIntelligenceUpdate):
    fields = data.model_dump()
    fields["icp_data"] = data.icp_data.model_dump(by_alias=True)
    intel = save_company_intelligence(db, user.id, **fields)
    db.commit()
    db.refresh(intel)
    return intel
