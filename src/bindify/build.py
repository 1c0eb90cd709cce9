"""File-level transform and project build."""

import logging
from pathlib import Path
from typing import IO, Any, Iterable, List, Mapping, Optional, Union

from bindify.compiler.transform import transform
from bindify.config import TransformOptions

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".html",)


class BuildTransform:
    """Runs :func:`bindify.transform` on files whose extension is accepted."""

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        options: Union[TransformOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self.extensions = tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions)
        # Resolve once so bad options fail before any file is read.
        self.options = TransformOptions.resolve(options)

    def accepts(self, path: Union[Path, str]) -> bool:
        return Path(path).suffix in self.extensions

    def transform_text(self, text: str) -> str:
        return transform(text, self.options)

    def transform_stream(self, stream: IO[str]) -> str:
        """Read the whole stream, then transform it; the tree needs the complete document."""
        buffered = stream.read()
        return self.transform_text(buffered)

    def transform_file(self, path: Union[Path, str]) -> Optional[str]:
        """Transformed file contents, or None when the extension is not accepted."""
        if not self.accepts(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return self.transform_stream(f)


def build_project(
    source_dir: Path,
    output_dir: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    options: Union[TransformOptions, Mapping[str, Any], None] = None,
) -> List[Path]:
    """Transform every accepted file under source_dir into output_dir, mirroring the tree."""
    source_dir = Path(source_dir)
    output_dir = Path(output_dir)
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    builder = BuildTransform(extensions, options)
    written: List[Path] = []

    for source in sorted(source_dir.rglob("*")):
        if not source.is_file():
            continue
        result = builder.transform_file(source)
        if result is None:
            continue

        target = output_dir / source.relative_to(source_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result, encoding="utf-8")
        logger.info("Built %s -> %s", source, target)
        written.append(target)

    return written
