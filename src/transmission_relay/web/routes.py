"""
Relay Routes
============
Endpoints for reading, uploading and rendering the current issue.

Route order matters: the renderer page is a catch-all and must stay the
last GET route.
"""

import logging

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from transmission_relay.clients import RelayClient
from transmission_relay.config import MEBIBYTE, Settings
from transmission_relay.controller import StoreDocumentSource, TransmissionController
from transmission_relay.exceptions import (
    FileTooLarge,
    IOFailure,
    StoreError,
    StoreUnavailable,
    UploadRejected,
    ValidationError,
    WrongMimeType,
)
from transmission_relay.rendering import ModuleRenderer, create_environment, load_stylesheet
from transmission_relay.storage import DocumentStore
from transmission_relay.validation import DocumentValidator

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_MIMETYPE = "application/json"


def _upload_reply(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": status_code == 200, "message": message},
    )


async def _read_upload(upload: UploadFile, settings: Settings) -> bytes:
    """Read an uploaded file, enforcing its declared type and size limit.

    Raises:
        WrongMimeType: If the file is not declared as JSON
        FileTooLarge: If the file exceeds MAX_UPLOAD_BYTES
    """
    mimetype = (upload.content_type or "").split(";")[0].strip().lower()
    if mimetype != JSON_MIMETYPE:
        raise WrongMimeType(upload.content_type)

    payload = await upload.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(payload) > settings.MAX_UPLOAD_BYTES:
        raise FileTooLarge(settings.MAX_UPLOAD_BYTES)
    return payload


@router.get("/api/current-data")
def current_data(request: Request):
    """Serve the persisted issue document verbatim."""
    store: DocumentStore = request.app.state.store
    try:
        payload = store.read_bytes()
    except StoreUnavailable as e:
        logger.error(f"API Error: {e.message}")
        return JSONResponse(status_code=404, content={"message": e.message})
    except IOFailure as e:
        logger.error(f"API Error reading data file: {e.message}")
        return JSONResponse(
            status_code=500, content={"message": "Error retrieving magazine data."}
        )
    return Response(content=payload, media_type=JSON_MIMETYPE)


@router.post("/upload")
async def upload(
    request: Request,
    data_file: UploadFile | None = File(default=None, alias=RelayClient.UPLOAD_FIELD),
):
    """
    Accept a new issue document.

    - **magazineDataFile**: JSON file, at most 5 MiB

    The document replaces the current one only if it passes validation.
    """
    if data_file is None:
        return _upload_reply(400, "No file uploaded.")

    settings: Settings = request.app.state.settings
    validator: DocumentValidator = request.app.state.validator
    store: DocumentStore = request.app.state.store

    try:
        payload = await _read_upload(data_file, settings)
        document = validator.validate_bytes(payload)
        store.replace(document)
    except (UploadRejected, ValidationError) as e:
        logger.error(f"Upload Error: {e.message}")
        return _upload_reply(400, e.message)
    except StoreError as e:
        logger.error(f"Upload Error: {e.message}")
        return _upload_reply(500, "Server error processing file.")
    finally:
        await data_file.close()

    cycle = document["cycleNumber"]
    logger.info(f"Success: Updated current issue with Cycle {cycle}")
    return _upload_reply(200, f"Data for Cycle {cycle} uploaded!")


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request):
    """Serve the upload dashboard."""
    settings: Settings = request.app.state.settings
    template = create_environment().get_template("dashboard.html.j2")
    return template.render(
        upload_path="/upload",
        field_name=RelayClient.UPLOAD_FIELD,
        max_upload_mb=settings.MAX_UPLOAD_BYTES // MEBIBYTE,
        stylesheet=load_stylesheet("magazine.css"),
    )


@router.get("/{full_path:path}")
def renderer_page(full_path: str, request: Request):
    """Render the current issue for any other path (client-side routing)."""
    if full_path.startswith("api/") or full_path == "upload":
        return PlainTextResponse("Resource Not Found", status_code=404)

    settings: Settings = request.app.state.settings
    controller = TransmissionController(
        StoreDocumentSource(request.app.state.store),
        renderer=ModuleRenderer(entrance_delay=settings.ENTRANCE_DELAY),
        default_template_name=settings.DEFAULT_TEMPLATE,
    )
    page = controller.run()
    return HTMLResponse(controller.render_html(page))
