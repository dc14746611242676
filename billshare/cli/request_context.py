from dataclasses import dataclass


@dataclass
class FormatContext:
    bill_path: str


@dataclass
class ExportContext:
    bill_path: str
    output_name: str | None = None


@dataclass
class LinkContext:
    phone: str
    message: str
    use_web: bool


@dataclass
class RequestContext:
    format: FormatContext | None = None
    export: ExportContext | None = None
    link: LinkContext | None = None
