"""Token import pipeline.

Coordinates a multi-source import:
- Adapter selection per source file
- Input limits (source size, number of stylesheets)
- Extraction and precedence-ordered merge
- Optional color normalization
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .colors import normalize_color_tokens
from .config import ExtractionConfig
from .errors import SourceNotFoundError, UnsupportedSourceError
from .merge import merge_tokens
from .normalizer import to_simple_tokens
from .parser import has_token_content
from .token_adapters.base import TokenAdapter, create_registry
from .token_adapters.css_vars import CSSVariablesAdapter
from .token_adapters.shadcn import ShadcnThemeAdapter
from .token_adapters.tailwind import TailwindConfigAdapter
from .token_logging import LogCategory, get_category_logger
from .tokens import DesignTokens, SimpleDesignTokens

logger = get_category_logger(LogCategory.PIPELINE)

# Merge order: config first, stylesheets override it, exports override both
STAGE_TAILWIND = 0
STAGE_CSS = 1
STAGE_EXPORT = 2


@dataclass
class SourceFile:
    """A named token source held in memory."""

    name: str
    content: str

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))


@dataclass
class SkippedSource:
    """A source that was not extracted, with the reason."""

    name: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "reason": self.reason}


@dataclass
class ImportResult:
    """Result of a multi-source token import."""

    tokens: DesignTokens
    sources: list[str] = field(default_factory=list)
    skipped: list[SkippedSource] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def has_content(self) -> bool:
        """Check if any source contributed a token."""
        return has_token_content(self.tokens)

    @property
    def simple(self) -> SimpleDesignTokens:
        """The stored (flat) form of the merged tokens."""
        return to_simple_tokens(self.tokens)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tokens": self.tokens.to_dict(),
            "sources": self.sources,
            "skipped": [s.to_dict() for s in self.skipped],
            "summary": self.tokens.category_counts(),
            "execution_time_ms": self.execution_time_ms,
        }


def _stage(adapter: TokenAdapter) -> int:
    if isinstance(adapter, TailwindConfigAdapter):
        return STAGE_TAILWIND
    if isinstance(adapter, (ShadcnThemeAdapter, CSSVariablesAdapter)):
        return STAGE_CSS
    return STAGE_EXPORT


class TokenImporter:
    """Imports and merges tokens from several source files.

    Sources are merged Tailwind configs first, then stylesheets in listing
    order, then JSON exports, so later stages override earlier ones. A
    source that fails to extract contributes nothing; it never aborts the
    import.
    """

    def __init__(self, config: ExtractionConfig | None = None):
        """Initialize the importer.

        Args:
            config: Optional extraction configuration.
        """
        self.config = config or ExtractionConfig()
        self.registry = create_registry(self.config)

    def import_sources(self, sources: list[SourceFile]) -> ImportResult:
        """Extract and merge in-memory sources.

        Raises:
            UnsupportedSourceError: If no adapter accepts a source name.
        """
        started = time.perf_counter()
        planned: list[tuple[int, int, SourceFile, TokenAdapter]] = []
        skipped: list[SkippedSource] = []

        for index, source in enumerate(sources):
            adapter = self.registry.get_adapter(Path(source.name))
            if adapter is None:
                raise UnsupportedSourceError(source.name)
            planned.append((_stage(adapter), index, source, adapter))

        # Stable sort keeps listing order within a stage
        planned.sort(key=lambda item: (item[0], item[1]))

        partials: list[DesignTokens] = []
        used: list[str] = []
        css_count = 0

        for stage, _, source, adapter in planned:
            if source.size > self.config.max_input_bytes:
                logger.warning(
                    f"Skipping {source.name}: {source.size} bytes exceeds "
                    f"{self.config.max_input_bytes}",
                    extra={"source_name": source.name},
                )
                skipped.append(SkippedSource(source.name, "input too large"))
                continue

            # Oversized stylesheets never take a slot
            if stage == STAGE_CSS:
                if css_count >= self.config.max_css_files:
                    logger.warning(
                        f"Skipping {source.name}: more than "
                        f"{self.config.max_css_files} stylesheets",
                        extra={"source_name": source.name},
                    )
                    skipped.append(SkippedSource(source.name, "css file limit reached"))
                    continue
                css_count += 1

            partials.append(adapter.extract_from_content(source.content, source.name))
            used.append(source.name)

        tokens = merge_tokens(*partials)
        if self.config.normalize_colors:
            tokens = normalize_color_tokens(tokens)

        execution_time_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Imported {tokens.total_tokens} tokens from {len(used)} sources",
            extra={"token_count": tokens.total_tokens, "duration_ms": round(execution_time_ms, 3)},
        )
        return ImportResult(
            tokens=tokens,
            sources=used,
            skipped=skipped,
            execution_time_ms=execution_time_ms,
        )

    def import_files(self, paths: list[Path]) -> ImportResult:
        """Read source files and import them.

        Oversized files are skipped without being read.

        Raises:
            SourceNotFoundError: If a file doesn't exist.
            UnsupportedSourceError: If no adapter accepts a file.
        """
        sources: list[SourceFile] = []
        oversized: list[SkippedSource] = []

        for path in paths:
            path = Path(path)
            if not path.is_file():
                raise SourceNotFoundError(str(path))
            if self.registry.get_adapter(path) is None:
                raise UnsupportedSourceError(str(path))

            size = path.stat().st_size
            if size > self.config.max_input_bytes:
                logger.warning(
                    f"Skipping {path}: {size} bytes exceeds {self.config.max_input_bytes}",
                    extra={"source_name": str(path)},
                )
                oversized.append(SkippedSource(str(path), "input too large"))
                continue

            sources.append(SourceFile(str(path), path.read_text(encoding="utf-8")))

        result = self.import_sources(sources)
        result.skipped = oversized + result.skipped
        return result


def import_files(
    paths: list[Path], config: ExtractionConfig | None = None
) -> ImportResult:
    """Convenience function to import token files with one importer."""
    return TokenImporter(config).import_files(paths)
