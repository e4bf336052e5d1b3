"""Command-line interface for transmission-relay."""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from transmission_relay.clients import RelayClient
from transmission_relay.config import Settings
from transmission_relay.controller import (
    HttpDocumentSource,
    StoreDocumentSource,
    TransmissionController,
    TransmissionState,
)
from transmission_relay.storage import FileDocumentStore
from transmission_relay.validation import DocumentValidator
from transmission_relay.web import create_app

DEFAULT_RENDER_OUTPUT = Path("./workspace/index.html")
DEFAULT_BASE_URL = "http://localhost:8080"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _client_config(base_url: str) -> dict:
    return {
        "base_url": base_url,
        "headers": {"User-Agent": "transmission-relay/1.0"},
    }


def serve(args: argparse.Namespace) -> int:
    """Execute the serve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    settings = Settings()
    if args.host is not None:
        settings.HOST = args.host
    if args.port is not None:
        settings.PORT = args.port
    if args.data_dir is not None:
        settings.DATA_DIR = str(args.data_dir)

    app = create_app(settings)

    logger.info(f"Server listening on port {settings.PORT}")
    logger.info(f"  Renderer: http://localhost:{settings.PORT}/")
    logger.info(f"  Dashboard: http://localhost:{settings.PORT}/dashboard")
    logger.info(f"  API: http://localhost:{settings.PORT}/api/current-data")
    logger.info(f"  Data file: {settings.data_file_path}")

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
    return 0


def init_store(args: argparse.Namespace) -> int:
    """Execute the init command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    settings = Settings()
    data_dir = args.data_dir if args.data_dir is not None else Path(settings.DATA_DIR)
    store = FileDocumentStore(data_dir / settings.DATA_FILENAME)

    try:
        created = store.ensure_initialized()
    except Exception as e:
        logger.error(f"Failed to initialize data store: {e}")
        return 1

    if created:
        logger.info(f"Initialized placeholder issue at {store.path}")
    else:
        logger.info(f"Issue already present at {store.path}")
    return 0


def validate_file(args: argparse.Namespace) -> int:
    """Execute the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    path = args.file.resolve()
    if not path.exists():
        logger.error(f"File not found: {path}")
        return 1

    validator = DocumentValidator()
    try:
        document = validator.validate_bytes(path.read_bytes())
    except Exception as e:
        logger.error(f"Invalid issue document: {e}")
        return 1

    logger.info(f"Valid issue document: Cycle {document['cycleNumber']}")
    logger.info(f"  Modules: {len(document['mainContent'])}")
    warnings = validator.warnings(document)
    if warnings:
        logger.warning(f"  Warnings: {len(warnings)}")
        for warning in warnings:
            logger.warning(f"    - {warning}")

    return 0


def upload_file(args: argparse.Namespace) -> int:
    """Execute the upload command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    path = args.file.resolve()
    if not path.exists():
        logger.error(f"File not found: {path}")
        return 1

    try:
        with RelayClient(_client_config(args.base_url)) as client:
            result = client.upload(path)
    except Exception as e:
        logger.error(f"Upload failed: {e}")
        return 1

    logger.info(result.get("message", "Upload complete."))
    return 0


def render_page(args: argparse.Namespace) -> int:
    """Execute the render command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.base_url is None and args.data_file is None:
        logger.error("Must specify either --base-url or --data-file")
        return 1

    if args.base_url is not None and args.data_file is not None:
        logger.error("Cannot specify both --base-url and --data-file")
        return 1

    settings = Settings()
    client = None
    if args.base_url is not None:
        client = RelayClient(_client_config(args.base_url))
        source = HttpDocumentSource(client)
    else:
        source = StoreDocumentSource(FileDocumentStore(args.data_file.resolve()))

    try:
        controller = TransmissionController(
            source, default_template_name=settings.DEFAULT_TEMPLATE
        )
        page = controller.run()
        html = controller.render_html(page)
    finally:
        if client is not None:
            client.close()

    output = args.output
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    if controller.state == TransmissionState.ERROR_DISPLAYED:
        logger.error(f"Rendered error panel: {page.error}")
        logger.info(f"  Output: {output}")
        return 1

    logger.info(f"Rendered Cycle {page.cycle_number}")
    logger.info(f"  Modules: {len(page.modules)}")
    logger.info(f"  Output: {output}")
    if args.json:
        summary = {
            "cycleNumber": page.cycle_number,
            "template": page.template_name,
            "modules": [m.module_id for m in page.modules],
        }
        print(json.dumps(summary, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="transmission-relay",
        description="Distribute, validate and render magazine issue documents",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the relay web server",
        description="Serve the issue API, the upload dashboard and the rendered issue page.",
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PORT or 8080)")
    serve_parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the current issue document (default: DATA_DIR or ./data)",
    )
    serve_parser.set_defaults(func=serve)

    init_parser = subparsers.add_parser(
        "init",
        help="Create the placeholder issue if none exists",
        description="Create the data directory and the cycle 0 placeholder issue document if they are absent.",
    )
    init_parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the current issue document (default: DATA_DIR or ./data)",
    )
    init_parser.set_defaults(func=init_store)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check an issue document without uploading it",
        description="Run the upload validator against a local JSON file and report errors and warnings.",
    )
    validate_parser.add_argument(
        "--file",
        type=Path,
        required=True,
        help="Path to the issue document JSON file",
    )
    validate_parser.set_defaults(func=validate_file)

    upload_parser = subparsers.add_parser(
        "upload",
        help="Upload an issue document to a relay server",
        description="POST a JSON issue document to a running relay server's upload endpoint.",
    )
    upload_parser.add_argument(
        "--file",
        type=Path,
        required=True,
        help="Path to the issue document JSON file",
    )
    upload_parser.add_argument(
        "--base-url",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"Relay server base URL (default: {DEFAULT_BASE_URL})",
    )
    upload_parser.set_defaults(func=upload_file)

    render_parser = subparsers.add_parser(
        "render",
        help="Render the current issue to an HTML file",
        description="Fetch the current issue from a relay server or a local data file and render it to HTML.",
    )
    render_parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Relay server base URL to fetch the issue from",
    )
    render_parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Local issue document to render instead of fetching",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_RENDER_OUTPUT,
        help=f"Output HTML file (default: {DEFAULT_RENDER_OUTPUT})",
    )
    render_parser.add_argument(
        "--json",
        action="store_true",
        help="Also print a JSON summary of the rendered page",
    )
    render_parser.set_defaults(func=render_page)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
