from fastapi import APIRouter, Depends
from sales_dashboard.schemas.email import SendReportRequest, SendReportResponse
from sales_dashboard.service.email_service import EmailService
from sales_dashboard.api.deps import get_owner_id, get_email_service

router = APIRouter(prefix="/email", tags=["email"])


@router.post("/send-report", response_model=SendReportResponse, summary="Email an HTML report")
async def send_report(
    payload: SendReportRequest,
    owner_id: str = Depends(get_owner_id),
    service: EmailService = Depends(get_email_service),
):
    return await service.send_report(payload)
