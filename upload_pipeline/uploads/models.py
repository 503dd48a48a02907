from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from upload_pipeline.uploads.exceptions import ConfigurationError

PathFunc = Callable[[Mapping[str, Any]], str]
HandlerFunc = Callable[[str, str, str], None]


@dataclass(frozen=True)
class UploadedFile:
    """A file staged by the host after a form submission.

    ``temp_name`` is empty when the field was submitted without a file.
    """

    temp_name: str
    name: str
    base_name: str
    extension: str
    size: int = 0
    type: str = ""

    @classmethod
    def from_path(cls, temp_name: str | Path, name: str, type: str = "") -> "UploadedFile":
        """Describe a staged temp file using the client-supplied file name."""
        temp_name = str(temp_name) if temp_name else ""
        client_name = Path(name).name
        size = Path(temp_name).stat().st_size if temp_name and Path(temp_name).is_file() else 0
        return cls(
            temp_name=temp_name,
            name=client_name,
            base_name=Path(client_name).stem,
            extension=Path(client_name).suffix.lstrip(".").lower(),
            size=size,
            type=type,
        )


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Size must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def coerce(cls, value: "Size | Mapping[str, int] | tuple[int, int]") -> "Size":
        if isinstance(value, Size):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(width=int(value["width"]), height=int(value["height"]))
            except KeyError as exc:
                raise ConfigurationError(f"Size mapping is missing {exc}") from exc
        if isinstance(value, tuple) and len(value) == 2:
            return cls(width=int(value[0]), height=int(value[1]))
        raise ConfigurationError(f"Cannot interpret {value!r} as a size")


@dataclass(frozen=True)
class StaticPath:
    """Directory given as a string; may start with an ``@alias``."""

    expression: str


@dataclass(frozen=True)
class DynamicPath:
    """Directory computed from the record's attributes at call time."""

    func: PathFunc


PathExpr = Union[StaticPath, DynamicPath]


@dataclass(frozen=True)
class CustomHandler:
    """Caller-supplied routine invoked as ``func(tmp_file, destination, folder)``."""

    func: HandlerFunc


@dataclass(frozen=True)
class ImagePolicy:
    """Declarative resize / thumbnail / keep-original policy."""

    size: Size
    quality: int
    thumbnail_size: Size | None = None
    thumbnail_quality: int | None = None
    save_original: bool = False

    def __post_init__(self) -> None:
        for label, value in (("quality", self.quality), ("thumbnail_quality", self.thumbnail_quality)):
            if value is not None and not 1 <= value <= 100:
                raise ConfigurationError(f"{label} must be within 1..100, got {value}")

    @property
    def effective_thumbnail_quality(self) -> int:
        if self.thumbnail_quality is not None:
            return self.thumbnail_quality
        return self.quality

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ImagePolicy":
        if "size" not in data or "quality" not in data:
            raise ConfigurationError("Image policy requires 'size' and 'quality'")
        thumbnail_size = data.get("thumbnail_size")
        thumbnail_quality = data.get("thumbnail_quality")
        return cls(
            size=Size.coerce(data["size"]),
            quality=int(data["quality"]),
            thumbnail_size=Size.coerce(thumbnail_size) if thumbnail_size is not None else None,
            thumbnail_quality=int(thumbnail_quality) if thumbnail_quality is not None else None,
            save_original=bool(data.get("save_original", False)),
        )


HandlerSpec = Union[CustomHandler, ImagePolicy]


@dataclass(frozen=True)
class StepConfig:
    """One target directory and what to write into it."""

    path: PathExpr
    handler: HandlerSpec | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path, (StaticPath, DynamicPath)):
            raise ConfigurationError(
                "Step path must be a string or a callable returning the directory"
            )
        if self.handler is not None and not isinstance(self.handler, (CustomHandler, ImagePolicy)):
            raise ConfigurationError(
                "Handler must be a callable or an image policy mapping"
            )

    @classmethod
    def build(cls, path: Any, handler: Any = None) -> "StepConfig":
        """Wrap plain strings, callables and mappings into their tagged variants."""
        if isinstance(path, str):
            path = StaticPath(path)
        elif callable(path) and not isinstance(path, (StaticPath, DynamicPath)):
            path = DynamicPath(path)

        if isinstance(handler, Mapping):
            handler = ImagePolicy.from_mapping(handler)
        elif callable(handler) and not isinstance(handler, (CustomHandler, ImagePolicy)):
            handler = CustomHandler(handler)

        return cls(path=path, handler=handler)


@dataclass(frozen=True)
class UploadConfig:
    """Immutable settings of one upload behavior attached to a record type."""

    steps: tuple[StepConfig, ...]
    file_attribute: str = "upload_file"
    storage_attribute: str = "images"
    new_file_name: str | None = None
    thumbnail_prefix: str = "thumb-"
    original_prefix: str = "original-"
    scenarios: frozenset[str] = field(default_factory=lambda: frozenset({"default"}))
    delete_files_with_record: bool = False
    clean_dir_on_update: bool = False

    def __post_init__(self) -> None:
        # callers may pass lists, sets or generators
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise ConfigurationError('The "steps" property must be set.')
        scenarios = self.scenarios
        if isinstance(scenarios, str):
            scenarios = (scenarios,)
        object.__setattr__(self, "scenarios", frozenset(scenarios))
        for step in self.steps:
            if not isinstance(step, StepConfig):
                raise ConfigurationError(f"Expected StepConfig, got {type(step).__name__}")

    @classmethod
    def from_steps(cls, steps: Iterable[Any], **options: Any) -> "UploadConfig":
        """Build from StepConfig objects or ``{"path": ..., "handler": ...}`` mappings."""
        built = []
        for step in steps:
            if isinstance(step, StepConfig):
                built.append(step)
            elif isinstance(step, Mapping):
                if "path" not in step:
                    raise ConfigurationError("Each step requires a 'path'")
                built.append(StepConfig.build(step["path"], step.get("handler")))
            else:
                raise ConfigurationError(f"Cannot interpret {step!r} as a step")
        return cls(steps=tuple(built), **options)
