"""Generator options and output layout defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .loader import DEFAULT_EXTENSIONS

OUTPUT_DIR_NAME = "generated"
MODELS_DIR_NAME = "models"
CLIENT_FILE_NAME = "openApi.ts"
MODEL_EXTENSION = ".ts"

# Environment variable read by the CLI when SOURCE_DIR is not given
SOURCE_DIR_ENV = "OASGEN_SOURCE_DIR"


@dataclass(frozen=True)
class GeneratorOptions:
    """Where to look for documents and how to lay out generated files."""

    source_dir: Path
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    output_dir_name: str = OUTPUT_DIR_NAME
    models_dir_name: str = MODELS_DIR_NAME
    client_file_name: str = CLIENT_FILE_NAME
    model_extension: str = MODEL_EXTENSION

    def output_dir(self, document_path: Path) -> Path:
        """``generated/`` next to the document."""
        return document_path.parent / self.output_dir_name

    def models_dir(self, document_path: Path) -> Path:
        return self.output_dir(document_path) / self.models_dir_name

    def client_path(self, document_path: Path) -> Path:
        return self.output_dir(document_path) / self.client_file_name
