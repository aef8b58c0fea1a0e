"""Cutting optimization endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from cutplan.application.config import (
    config_to_settings,
    load_catalog_from_dict,
    load_config_from_dict,
)
from cutplan.infrastructure.cutting_plan import CuttingPlanService
from cutplan.infrastructure.exporters import ExporterRegistry
from cutplan.infrastructure.metrics_reporter import CuttingReport
from cutplan.web.exceptions import UnsupportedFormatError
from cutplan.web.schemas.requests import OptimizeRequest
from cutplan.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    OptimizeResponseSchema,
)

router = APIRouter(prefix="/optimize", tags=["optimize"])

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
    "svg": "image/svg+xml",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponseSchema, "description": "Unsupported export format"},
    422: {"model": ErrorResponseSchema, "description": "Invalid configuration or oversize piece"},
}


def _run(request: OptimizeRequest) -> CuttingReport:
    """Validate configuration and catalog, then optimize the piece list.

    Raises:
        ConfigError: If the configuration or catalog is invalid.
        PieceTooLargeError: If a piece fits no sheet.
    """
    config = load_config_from_dict(request.config)
    catalog = load_catalog_from_dict(request.catalog)
    service = CuttingPlanService(config_to_settings(config, catalog))
    requirements = [piece.to_requirement() for piece in request.pieces]
    return service.optimize(requirements, project_id=request.project_id)


@router.post("", response_model=OptimizeResponseSchema, responses=ERROR_RESPONSES)
async def optimize(request: OptimizeRequest) -> OptimizeResponseSchema:
    """Pack a piece list onto stock sheets.

    Args:
        request: Piece list, cutting configuration and optional catalog.

    Returns:
        Per-material report plus the flat cut list.
    """
    report = _run(request)
    data = report.to_dict()
    return OptimizeResponseSchema(
        project_id=data.get("project_id"),
        material_sheets=data["material_sheets"],
        cut_list=report.cut_list_rows(),
        total_sheets=report.total_sheets,
        total_pieces=report.total_pieces,
    )


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}", responses=ERROR_RESPONSES)
async def export(format_name: str, request: OptimizeRequest) -> Response:
    """Optimize and return the report in a registered export format.

    Args:
        format_name: Export format (json, csv, svg).
        request: Piece list, cutting configuration and optional catalog.

    Returns:
        The rendered document with a matching media type.
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    report = _run(request)
    exporter = ExporterRegistry.get(format_name)()
    filename = f"{request.project_id or 'cutplan'}_{format_name}.{exporter.file_extension}"
    return Response(
        content=exporter.export_string(report),
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
