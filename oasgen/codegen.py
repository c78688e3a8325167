"""Render templates into generated TypeScript files.

Takes the contexts from context_builder and produces a mapping of output
path to file content; the pipeline decides how to write it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorOptions
from .context_builder import ClientContext, ModelContext

TEMPLATE_DIR = Path(__file__).parent / "templates"


def ts_string(text: str) -> str:
    """Format text as a single-quoted TypeScript string literal."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def doc_safe(text: str) -> str:
    """Keep text from closing the surrounding doc comment."""
    return text.replace("*/", "*\\/")


class TemplateRenderer:
    """Jinja2 environment configured for TypeScript output."""

    def __init__(self, template_dir: Path | None = None) -> None:
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters.update({
            "ts_string": ts_string,
            "doc_safe": doc_safe,
        })

    def render(self, template_name: str, **context: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_model(self, model: ModelContext) -> str:
        return self.render("model.ts.j2", model=model)

    def render_index(self, models: list[ModelContext]) -> str:
        return self.render("index.ts.j2", models=models)

    def render_client(self, client: ClientContext) -> str:
        return self.render("client.ts.j2", client=client)


def render_models(
    renderer: TemplateRenderer,
    models: list[ModelContext],
    models_dir: Path,
    extension: str = ".ts",
) -> dict[Path, str]:
    """One file per model plus the index re-exporting all of them."""
    if not models:
        return {}
    files = {models_dir / f"{model.name}{extension}": renderer.render_model(model) for model in models}
    files[models_dir / f"index{extension}"] = renderer.render_index(models)
    return files


def generate(
    renderer: TemplateRenderer,
    models: list[ModelContext],
    client: ClientContext,
    document_path: Path,
    options: GeneratorOptions,
) -> dict[Path, str]:
    """Render every file for one document, models first, client last."""
    files = render_models(
        renderer, models, options.models_dir(document_path), options.model_extension,
    )
    files[options.client_path(document_path)] = renderer.render_client(client)
    return files
