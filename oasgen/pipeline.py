"""Scan a directory tree and generate models and a client per document.

Documents are processed one at a time. A parse or write failure is
reported and the run moves on to the next document; only a failure to scan
the root stops the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .codegen import TemplateRenderer, generate
from .config import GeneratorOptions
from .context_builder import build_client_context, build_model_contexts
from .errors import GenerationError, ParseFailure, ScanFailure, WriteFailure
from .filesystem import FileSystem, LocalFileSystem, write_files
from .loader import DocumentParser, discover_documents, parse_document
from .reporting import ConsoleReporter, Reporter


@dataclass
class RunSummary:
    documents: list[Path] = field(default_factory=list)
    generated: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    scan_failed: bool = False

    @property
    def ok(self) -> bool:
        return not self.scan_failed and not self.failed


def generate_document(
    document_path: Path,
    options: GeneratorOptions,
    fs: FileSystem,
    reporter: Reporter,
    parser: DocumentParser = parse_document,
    renderer: TemplateRenderer | None = None,
) -> dict[Path, str]:
    """Parse one document, render its files and write them.

    Raises:
        ParseFailure: the document could not be read or parsed.
        WriteFailure: a generated file could not be written.
    """
    renderer = renderer or TemplateRenderer()
    name = document_path.stem

    try:
        text = fs.read_text(document_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseFailure(f"cannot read document: {exc}", document_path) from exc
    try:
        document = parser(text)
    except ParseFailure as exc:
        raise ParseFailure(exc.message, document_path) from exc

    for issue in document.issues:
        reporter.warning(f"{document_path}: {issue} (degraded to any)")

    models = build_model_contexts(document)
    client = build_client_context(document, document_path)
    for rename in client.renames:
        reporter.warning(f"{document_path}: {rename}")

    files = generate(renderer, models, client, document_path, options)

    try:
        fs.mkdir(options.output_dir(document_path))
        write_files(fs, files)
    except OSError as exc:
        raise WriteFailure(f"cannot write generated files: {exc}", document_path) from exc

    if models:
        reporter.info(f"Generated {len(models)} model(s) for {name}")
    else:
        reporter.info(f"No schemas in {name}, skipping models")
    reporter.info(f"Generated client {client.class_name} for {name}")
    return files


def generate_all(
    options: GeneratorOptions,
    fs: FileSystem | None = None,
    reporter: Reporter | None = None,
    parser: DocumentParser = parse_document,
) -> RunSummary:
    """Generation entry point: every document under ``options.source_dir``."""
    fs = fs or LocalFileSystem()
    reporter = reporter or ConsoleReporter()
    summary = RunSummary()
    root = Path(options.source_dir)

    try:
        summary.documents = discover_documents(fs, root, options.extensions)
    except OSError as exc:
        failure = ScanFailure(f"cannot scan directory: {exc}", root)
        reporter.error(str(failure))
        summary.scan_failed = True
        return summary

    if not summary.documents:
        reporter.warning(f"No YAML files found in {root}")
        return summary

    reporter.info(f"Found {len(summary.documents)} OpenAPI document(s) in {root}")

    renderer = TemplateRenderer()
    for document_path in summary.documents:
        try:
            generate_document(document_path, options, fs, reporter, parser, renderer)
        except GenerationError as exc:
            reporter.error(str(exc))
            summary.failed.append(document_path)
        else:
            summary.generated.append(document_path)

    reporter.info("Generation finished.")
    return summary
