from typing import Optional
from pydantic import BaseModel


class SendReportRequest(BaseModel):
    # validated in the service to return the same 400 for missing and empty values
    recipient_email: Optional[str] = None
    report_html: Optional[str] = None
    report_subject: Optional[str] = None


class SendReportResponse(BaseModel):
    message: str
    email: str
