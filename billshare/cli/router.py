import sys
from pathlib import Path

from wireup import service

from billshare.cli.request_context import (
    ExportContext,
    FormatContext,
    LinkContext,
    RequestContext,
)
from billshare.core.exceptions import BillShareError
from billshare.export.export_service import BillExportService
from billshare.formatting.bill_formatter import format_bill_for_messaging
from billshare.messaging.messaging_service import MessagingService


def read_bill(bill_path: str) -> str | None:
    path_obj = Path(bill_path)
    if not path_obj.exists():
        print(f"Error: File not found: {bill_path}")
        return None
    return path_obj.read_text(encoding="utf-8")


async def handle_format(request: RequestContext) -> None:
    if not request.format:
        raise ValueError("No format context provided")

    html: str | None = read_bill(request.format.bill_path)
    if html is None:
        sys.exit(1)
    print(format_bill_for_messaging(html))


async def handle_export(
    export_service: BillExportService, request: RequestContext
) -> None:
    if not request.export:
        raise ValueError("No export context provided")

    html: str | None = read_bill(request.export.bill_path)
    if html is None:
        sys.exit(1)

    output_name: str = request.export.output_name or f"{Path(request.export.bill_path).stem}.pdf"
    print(f"Exporting: {request.export.bill_path}")
    try:
        saved: Path = await export_service.export_bill_as_document(html, output_name)
    except BillShareError as e:
        print(f"Error: {str(e)}")
        sys.exit(1)
    print(f"Saved: {saved}")


async def handle_link(
    messaging_service: MessagingService, request: RequestContext
) -> None:
    if not request.link:
        raise ValueError("No link context provided")

    try:
        url: str = messaging_service.build_messaging_link(
            request.link.phone, request.link.message, request.link.use_web
        )
    except BillShareError as e:
        print(f"Error: {str(e)}")
        sys.exit(1)
    print(url)


def show_usage() -> None:
    print("Usage: python main.py <command> [options]")
    print("Commands:")
    print("  format <bill.html>                  - Print the bill as messaging text.")
    print("  export <bill.html> [output-name]    - Save the bill as a paginated PDF.")
    print("  link <phone> <message...> [--web]   - Print a messaging deep link.")
    sys.exit(1)


def parse_args(argv: list[str]) -> RequestContext:
    if len(argv) < 2:
        show_usage()

    command: str = argv[1]

    if command == "format":
        if len(argv) < 3:
            print("Usage: python main.py format <bill.html>")
            sys.exit(1)
        return RequestContext(format=FormatContext(bill_path=argv[2]))
    elif command == "export":
        if len(argv) < 3:
            print("Usage: python main.py export <bill.html> [output-name]")
            sys.exit(1)
        output_name: str | None = argv[3] if len(argv) > 3 else None
        return RequestContext(
            export=ExportContext(bill_path=argv[2], output_name=output_name)
        )
    elif command == "link":
        args: list[str] = [arg for arg in argv[2:] if arg != "--web"]
        if len(args) < 2:
            print("Usage: python main.py link <phone> <message...> [--web]")
            sys.exit(1)
        return RequestContext(
            link=LinkContext(
                phone=args[0], message=" ".join(args[1:]), use_web="--web" in argv
            )
        )
    else:
        print(f"Unknown command: {command}")
        show_usage()
    raise ValueError(f"Unknown command: {command}")


@service
def route_command() -> RequestContext:
    return parse_args(sys.argv)


@service
class CliDispatcher:
    def __init__(
        self,
        request: RequestContext,
        export_service: BillExportService,
        messaging_service: MessagingService,
    ) -> None:
        self._request: RequestContext = request
        self._export: BillExportService = export_service
        self._messaging: MessagingService = messaging_service

    async def dispatch(self) -> None:
        if self._request.format:
            await handle_format(self._request)
            return

        if self._request.export:
            await handle_export(self._export, self._request)
            return

        if self._request.link:
            await handle_link(self._messaging, self._request)
            return

        raise ValueError("Invalid RequestContext")
