"""
Base emitter interface for all code emission targets.

Defines the contract that all language emitters implement and the
file pipeline around it: one text per model, then either one file per
model or a single merged file.
"""

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Sequence, Union
from pathlib import Path

from ...logging_config import get_logger
from .config import EmitterConfig
from .schema import Schema, Model, PropertyType, ArrayPropertyType
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

MERGE_SEPARATOR = "\n\n"


class EmitterError(Exception):
    """Base exception for code emission errors."""

    pass


class MissingDocumentError(EmitterError):
    """A model was rendered before its output document was declared."""

    pass


@dataclass(frozen=True)
class ModelFileContents:
    """Rendered text for one model and the path it would be written to."""

    model: Model
    path: str
    contents: str


@dataclass(frozen=True)
class EmittedFile:
    """A final output file."""

    path: str
    contents: str


def merge_contents(contents: Sequence[Union[str, ModelFileContents]]) -> str:
    """Join rendered texts in order, one blank line between each."""
    return MERGE_SEPARATOR.join(
        c if isinstance(c, str) else c.contents for c in contents
    )


class FileEmitter(ABC):
    """Abstract base class for all file emitters."""

    config_class = EmitterConfig

    def __init__(self, config: Optional[EmitterConfig] = None):
        """Initialize emitter with optional configuration."""
        self.config = config or EmitterConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this emitter."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    @property
    def output_type(self):
        return self.config.output_type

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this emitter.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this emitter."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def reset(self) -> None:
        """Drop per-run state. Called at the start of every emit_schema."""
        pass

    def prepare(self, schema: Schema) -> None:
        """Hook run once per emit_schema, after reset and before any model."""
        pass

    @abstractmethod
    def get_contents_for_model(self, model: Model) -> str:
        """
        Render the source text for a single model.

        Args:
            model: Model to render

        Returns:
            Rendered text for this model
        """
        pass

    def merge_file_contents(
        self, model_file_contents: Sequence[Union[str, ModelFileContents]]
    ) -> str:
        """Merge per-model texts into a single file body."""
        return merge_contents(model_file_contents)

    def get_file_path_for_model(self, model: Model) -> str:
        """
        Compute the output path for a model.

        ``{{ Name }}`` placeholders in the output setting are rendered with
        the model name. Without placeholders, one-file-per-model output
        treats the setting as a directory.
        """
        output = self.config.output
        if "{{" in output:
            return self.template_engine.render_string(
                output, {"Name": model.name, "model": model}
            )
        if self.config.one_file_per_model:
            directory = Path(output).as_posix()
            return posixpath.join(directory, f"{model.name}{self.file_extension}")
        return output

    def emit_schema(self, schema: Schema) -> List[EmittedFile]:
        """
        Emit every model of a schema, in schema order.

        Returns:
            One file per model, or a single merged file
        """
        self.reset()
        self.prepare(schema)
        logger.info(
            "Emitting %d model(s) as %s (%s)",
            len(schema.models),
            self.language_name,
            self.output_type.value,
        )

        model_contents = []
        for model in schema.models:
            path = self.get_file_path_for_model(model)
            contents = self.get_contents_for_model(model)
            logger.debug("Rendered model %s for %s", model.name, path)
            model_contents.append(ModelFileContents(model, path, contents))

        if self.config.one_file_per_model:
            return [
                EmittedFile(mc.path, self.format_code(mc.contents))
                for mc in model_contents
            ]

        merged = self.merge_file_contents(model_contents)
        return [EmittedFile(self.config.output, self.format_code(merged))]

    def validate_schema(self, schema: Schema) -> List[str]:
        """
        Report schema features that will degrade in the output.

        Dangling model references are not reported here;
        they surface when the generated code is compiled.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for model in schema.models:
            if not model.properties:
                warnings.append(f"Model '{model.name}' has no properties")

            for prop_name, prop_type in model.properties.items():
                for unknown in _unknown_tags(prop_type):
                    warnings.append(
                        f"Unknown property type '{unknown}' in "
                        f"{model.name}.{prop_name}"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic layout cleanup to a finished file.

        Strips trailing whitespace, collapses runs of blank lines, ends
        the file with exactly one newline and applies the line ending.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        return self.config.line_ending.join(formatted_lines) + self.config.line_ending



def _unknown_tags(prop_type: PropertyType) -> List[str]:
    if isinstance(prop_type, ArrayPropertyType):
        if isinstance(prop_type.member_type, PropertyType):
            return _unknown_tags(prop_type.member_type)
        return []
    if not prop_type.is_known:
        return [str(prop_type.type_name)]
    return []


class EmitResult:
    """Container for emission results and metadata."""

    def __init__(
        self,
        files: List[EmittedFile] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize emission result.

        Args:
            files: Emitted files
            warnings: Any warnings from emission
            metadata: Additional metadata about emission
        """
        self.files = files or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @property
    def code(self) -> str:
        """All emitted text, files separated by one blank line."""
        if not self.files:
            return ""
        line_ending = "\r\n" if self.files[0].contents.endswith("\r\n") else "\n"
        bodies = [f.contents.rstrip("\r\n") for f in self.files]
        return (line_ending * 2).join(bodies) + line_ending

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "EmitResult":
        """Create a failed emission result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def emit_code(emitter: FileEmitter, schema: Schema) -> EmitResult:
    """
    Emit a schema with error handling.

    Emitter errors become a failed result. A missing pre-declared document
    is a driver bug and propagates.

    Returns:
        EmitResult with files, warnings, and metadata
    """
    warnings = emitter.validate_schema(schema)
    for warning in warnings:
        logger.warning(warning)

    try:
        files = emitter.emit_schema(schema)
    except MissingDocumentError:
        raise
    except EmitterError as e:
        logger.error("Emission failed: %s", e)
        return EmitResult.error(f"Code emission failed: {e}", exception=e)

    metadata = {
        "language": emitter.language_name,
        "file_extension": emitter.file_extension,
        "output_type": emitter.output_type.value,
        "model_count": len(schema.models),
        "file_count": len(files),
    }
    return EmitResult(files, warnings, metadata)


def write_files(files: Sequence[EmittedFile], overwrite: bool = True) -> List[Path]:
    """
    Write emitted files to disk, creating parent directories.

    Raises:
        EmitterError: If a file exists and overwrite is False, or writing fails
    """
    written = []
    for emitted in files:
        path = Path(emitted.path)
        if path.exists() and not overwrite:
            raise EmitterError(f"Refusing to overwrite existing file: {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(emitted.contents)
        except OSError as e:
            raise EmitterError(f"Failed to write {path}: {e}") from e
        logger.info("Wrote %s", path)
        written.append(path)
    return written
