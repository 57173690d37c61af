"""Command line interface: export documents, packing lists and parse shipments."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Fix encoding for Windows console
if sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        pass  # already configured

from ..ai.client import ParserClient
from ..ai.parser import ShipmentParser, create_backend_from_config, to_line_items
from ..catalog.catalog import Catalog, DuplicateNameError
from ..catalog.seeds import INCOTERMS
from ..catalog.store import CatalogStore
from ..config import (
    AI_PROVIDERS,
    DEFAULT_AI_MODELS,
    clear_ai_config,
    get_ai_enabled,
    get_ai_endpoint,
    get_ai_key,
    get_ai_model,
    get_ai_provider,
    get_app_name,
    get_app_version,
    get_data_dir,
    get_default_output_dir,
    set_ai_config,
)
from ..config.profile_loader import CompanyProfile, list_available_profiles, load_profile
from ..engine.aggregation import compute_view
from ..engine.amount_words import amount_to_words
from ..engine.classification import designation, destination_city
from ..engine.formatting import format_amount, format_decimal, format_quantity, format_weight
from ..export.documents import export_all, export_document
from ..export.excel_export import export_packing_list
from ..layouts.base import DocumentType, ValidationRequiredError
from ..models.invoice_document import InvoiceDocument
from ..models.symbol import Symbol
from ..render.pdf_renderer import PDFRenderError
from ..render.preview import render_preview
from ..session import merge_parsed_items

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VALIDATION_REQUIRED = 2


class DocumentLoadError(Exception):
    """Raised when an invoice document file cannot be read."""
    pass


def load_document(path: str) -> InvoiceDocument:
    """Load an invoice document from a JSON file.

    Raises:
        DocumentLoadError: If the file is missing, not JSON or not a document
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")
        return InvoiceDocument.from_dict(data)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise DocumentLoadError(f"Cannot load document {path}: {e}") from e


def save_document(document: InvoiceDocument, path: str) -> None:
    """Write an invoice document to a JSON file."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(document.to_dict(), f, indent=2, ensure_ascii=False)


def _open_catalog() -> Catalog:
    return Catalog.load(CatalogStore(get_data_dir()))


def _load_profile(name: str) -> CompanyProfile:
    try:
        return load_profile(name)
    except FileNotFoundError:
        available = ", ".join(list_available_profiles())
        raise ValueError(f"Unknown profile '{name}' (available: {available})")


def _handle_export(args: argparse.Namespace) -> int:
    profile = _load_profile(args.profile)
    document = load_document(args.input)
    if args.validate:
        document.validate()
    catalog = _open_catalog()
    output_dir = Path(args.output) if args.output else get_default_output_dir()

    if args.type == "all":
        written, skipped = export_all(document, catalog, profile, output_dir)
        for doc_type in skipped:
            print(f"Skipped {doc_type.value}: validate the invoice first (--validate)")
    else:
        written = [export_document(args.type, document, catalog, profile, output_dir)]

    for pdf_path in written:
        print(f"PDF: {pdf_path}")
        if args.preview:
            print(f"Preview: {render_preview(pdf_path, output_dir)}")
    return EXIT_OK


def _handle_packing_list(args: argparse.Namespace) -> int:
    document = load_document(args.input)
    catalog = _open_catalog()
    output_path = args.output or str(
        get_default_output_dir() / f"Colisage_{Path(args.input).stem}.xlsx"
    )
    print(f"Excel: {export_packing_list(document, catalog, output_path)}")
    return EXIT_OK


def _handle_parse(args: argparse.Namespace) -> int:
    parser = ShipmentParser()
    if parser.backend is None:
        print("Error: AI parser is not configured (set AI_ENABLED=true and AI_KEY or AI_ENDPOINT)", file=sys.stderr)
        return EXIT_ERROR

    catalog = _open_catalog()
    try:
        suggestions = parser.parse(args.text)
    finally:
        parser.shutdown()
    items = to_line_items(suggestions, catalog)

    if not items:
        print("No lines recognised.")
    for item in items:
        product = catalog.find_product(item.product_id)
        name = product.name if product else item.product_id
        print(
            f"{name}: {format_quantity(item.quantity)} {item.symbol.value}, "
            f"brut {format_weight(item.gross_weight)} KG, net {format_weight(item.net_weight)} KG, "
            f"{format_amount(item.unit_price)} EUR/KG"
        )

    if args.input and args.write and items:
        document = load_document(args.input)
        merge_parsed_items(document, items)
        save_document(document, args.input)
        print(f"Added {len(items)} line(s) to {args.input}")
    return EXIT_OK


def _handle_catalog(args: argparse.Namespace) -> int:
    catalog = _open_catalog()

    if args.add:
        if args.kind == "products":
            catalog.add_product(args.add, latin_name=args.latin or "", symbol=Symbol.parse(args.symbol))
        elif args.kind == "clients":
            catalog.add_client(args.add, address=args.address or "")
        else:
            catalog.add_transport(args.add)
        print(f"Added {args.add.upper()} to {args.kind}")
        return EXIT_OK

    if args.kind == "products":
        for product in catalog.products:
            latin = f" ({product.latin_name})" if product.latin_name else ""
            print(f"{product.id:<16} {product.name}{latin} [{product.default_symbol.value}]")
    elif args.kind == "clients":
        for client in catalog.clients:
            print(f"{client.name} - {client.address}")
    else:
        for name in catalog.transports:
            print(name)
    return EXIT_OK


def _handle_summary(args: argparse.Namespace) -> int:
    profile = _load_profile(args.profile)
    document = load_document(args.input)
    catalog = _open_catalog()
    view = compute_view(document.items, catalog, profile.plastic_factor)
    totals = view.totals
    symbol = view.unified_symbol.value if view.unified_symbol else "-"

    print(f"Invoice:      {document.invoice_number or '(draft)'}")
    print(f"Client:       {document.client_name}")
    print(f"Destination:  {destination_city(document.client_address, profile.default_destination_city)}")
    print(f"Lines:        {len(view.lines)}")
    print(f"Quantity:     {format_quantity(totals.quantity)} {symbol}")
    print(f"Gross weight: {format_weight(totals.gross)} KG")
    print(f"Net weight:   {format_weight(totals.net)} KG")
    print(f"Plastic:      {format_decimal(view.plastic_weight, 2)} KG")
    print(f"Total:        {format_amount(totals.monetary)} EUR")
    print(f"In words:     {amount_to_words(totals.monetary, profile.amount_words_mode)} {profile.currency_word}")
    print(f"Designation:  {designation(document.items, catalog, profile.mollusk_names)}")
    if view.has_weight_error:
        offending = [line.product_name for line in view.lines if line.weight_error]
        where = f" on {', '.join(offending)}" if offending else " in the totals"
        print(f"Warning: net weight exceeds gross weight{where}")
    if document.incoterm.upper() not in INCOTERMS:
        print(f"Warning: unknown incoterm {document.incoterm}")
    return EXIT_OK


def _handle_ai_config(args: argparse.Namespace) -> int:
    if args.clear:
        clear_ai_config()
        print("AI settings cleared")
    elif any(value is not None for value in (args.enable, args.provider, args.model, args.key, args.endpoint)):
        provider = args.provider or get_ai_provider()
        model = args.model or (get_ai_model() if provider == get_ai_provider() else DEFAULT_AI_MODELS[provider])
        set_ai_config(
            enabled=get_ai_enabled() if args.enable is None else args.enable,
            provider=provider,
            model=model,
            api_key=args.key,
            endpoint=args.endpoint,
        )
        print("AI settings saved")

    print(f"Enabled:  {'yes' if get_ai_enabled() else 'no'}")
    print(f"Provider: {get_ai_provider()}")
    print(f"Model:    {get_ai_model()}")
    print(f"Endpoint: {get_ai_endpoint() or '-'}")
    print(f"API key:  {'set' if get_ai_key() else 'not set'}")

    if not args.check:
        return EXIT_OK
    backend = create_backend_from_config()
    if backend is None:
        print("Error: AI parser is not configured", file=sys.stderr)
        return EXIT_ERROR
    if isinstance(backend, ParserClient):
        if not backend.health_check():
            print(f"Error: parser service at {backend.endpoint} is not reachable", file=sys.stderr)
            return EXIT_ERROR
        print(f"Parser service at {backend.endpoint} is reachable")
    else:
        print(f"Using hosted provider {get_ai_provider()}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seadocs",
        description=f"{get_app_name()} - invoice, CMR, shipping note and transport invoice generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export documents to PDF")
    export.add_argument("--input", required=True, help="Invoice document JSON file")
    export.add_argument(
        "--type",
        choices=[t.value for t in DocumentType] + ["all"],
        default="invoice",
        help="Document to export (default: invoice)",
    )
    export.add_argument("--validate", action="store_true", help="Mark the invoice as validated before exporting")
    export.add_argument("--output", help="Output directory (default: out/ or the user data directory)")
    export.add_argument("--preview", action="store_true", help="Also write a PNG preview of each PDF")
    export.add_argument("--profile", default="default", help="Company profile name (default: default)")
    export.set_defaults(handler=_handle_export)

    packing = subparsers.add_parser("packing-list", help="Export the packing list to Excel")
    packing.add_argument("--input", required=True, help="Invoice document JSON file")
    packing.add_argument("--output", help="Output .xlsx path")
    packing.set_defaults(handler=_handle_packing_list)

    parse = subparsers.add_parser("parse", help="Parse a free-text shipment description with AI")
    parse.add_argument("text", help="Shipment text, e.g. '20 caisses merlu 250 kg brut 230 net a 4,50'")
    parse.add_argument("--input", help="Invoice document JSON file to add the lines to")
    parse.add_argument("--write", action="store_true", help="Save the parsed lines into --input")
    parse.set_defaults(handler=_handle_parse)

    catalog = subparsers.add_parser("catalog", help="List or extend the reference catalogs")
    catalog.add_argument("kind", choices=["products", "clients", "transports"])
    catalog.add_argument("--add", metavar="NAME", help="Add an entry (stored uppercase)")
    catalog.add_argument("--latin", help="Latin name (products)")
    catalog.add_argument("--symbol", default="C", help="Default symbol C or P (products)")
    catalog.add_argument("--address", help="Address (clients)")
    catalog.set_defaults(handler=_handle_catalog)

    summary = subparsers.add_parser("summary", help="Print totals and derived texts")
    summary.add_argument("--input", required=True, help="Invoice document JSON file")
    summary.add_argument("--profile", default="default", help="Company profile name (default: default)")
    summary.set_defaults(handler=_handle_summary)

    ai_config = subparsers.add_parser("ai-config", help="Show or change the saved AI parser settings")
    enable = ai_config.add_mutually_exclusive_group()
    enable.add_argument("--enable", dest="enable", action="store_true", default=None, help="Turn the AI parser on")
    enable.add_argument("--disable", dest="enable", action="store_false", default=None, help="Turn the AI parser off")
    ai_config.add_argument("--provider", choices=AI_PROVIDERS, help="Hosted provider")
    ai_config.add_argument("--model", help="Model name (default: the provider's default model)")
    ai_config.add_argument("--key", help="API key for the provider or the parser service")
    ai_config.add_argument("--endpoint", help="Parser service URL (takes precedence over the provider)")
    ai_config.add_argument("--clear", action="store_true", help="Remove all saved AI settings")
    ai_config.add_argument("--check", action="store_true", help="Check that the configured parser is usable")
    ai_config.set_defaults(handler=_handle_ai_config)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    try:
        exit_code = args.handler(args)
    except ValidationRequiredError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = EXIT_VALIDATION_REQUIRED
    except (DocumentLoadError, DuplicateNameError, PDFRenderError, OSError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = EXIT_ERROR

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
