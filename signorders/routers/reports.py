"""Reports router - PDF order reports."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db
from signorders.schemas.auth import UserSession
from signorders.schemas.report import ReportData, ReportFilters, ReportGenerateResponse
from signorders.services import report_service

router = APIRouter()


@router.post("/preview", response_model=ReportData)
def preview_report(
    filters: ReportFilters,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Grouped counts without rendering a PDF. 404 when nothing matches."""
    return report_service.collect_report_data(db, session, filters)


@router.post("/generate", response_model=ReportGenerateResponse)
def generate_report(
    filters: ReportFilters,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    filename, data = report_service.generate_report(db, session, filters)
    return ReportGenerateResponse(
        message="Report generated successfully",
        filename=filename,
        download_url=f"/reports/download/{filename}",
        data=data,
    )


@router.get("/download/{filename}")
def download_report(
    filename: str,
    session: UserSession = Depends(get_current_session),
):
    """Stream a stored report. Only report_<digits>.pdf names are served."""
    path = report_service.resolve_report_path(filename)
    return FileResponse(path, media_type="application/pdf", filename=filename)
