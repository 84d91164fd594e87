"""Base class for design token adapters.

Token adapters extract design tokens from one source format (JSON, Tailwind
config text, CSS custom properties, theme CSS, design-tool exports) and
return a partial ``DesignTokens``. Extraction is pure and best-effort:
adapters never raise on malformed content, they log and return an empty
result so that one bad file cannot abort a multi-source import.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import SourceNotFoundError, UnsupportedSourceError
from ..token_logging import LogCategory, get_category_logger
from ..tokens import DesignTokens

if TYPE_CHECKING:
    from ..config import ExtractionConfig

logger = get_category_logger(LogCategory.EXTRACTION)


class TokenAdapter(ABC):
    """Abstract base class for design token adapters."""

    #: Short identifier used in logs and CLI output
    name: str = "base"

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this adapter can handle."""
        ...

    def can_handle(self, file_path: Path) -> bool:
        """Check if this adapter can handle the given file.

        Args:
            file_path: Path (or bare file name) of the token source.

        Returns:
            True if this adapter can extract tokens from the file.
        """
        return file_path.suffix.lower() in self.supported_extensions

    @abstractmethod
    def _extract(self, content: str) -> DesignTokens:
        """Extract tokens from content. May raise; callers guard it."""
        ...

    def extract_from_content(
        self, content: str, source_name: str = "inline"
    ) -> DesignTokens:
        """Extract tokens from a content string.

        Args:
            content: The raw source text.
            source_name: Name to use in log messages.

        Returns:
            DesignTokens with the categories found. Empty on any failure.
        """
        return self._guarded(self._extract, content, source_name)

    def extract(self, file_path: Path) -> DesignTokens:
        """Extract tokens from the given file.

        Raises:
            SourceNotFoundError: If the file doesn't exist.
        """
        if not file_path.exists():
            raise SourceNotFoundError(str(file_path))

        content = file_path.read_text(encoding="utf-8")
        return self.extract_from_content(content, str(file_path))

    def _guarded(
        self,
        func: Callable[[Any], DesignTokens],
        payload: Any,
        source_name: str,
    ) -> DesignTokens:
        started = time.perf_counter()
        try:
            tokens = func(payload)
        except Exception as e:
            logger.warning(
                f"{self.name}: extraction failed for {source_name}: {e}",
                extra={"source_name": source_name},
            )
            logger.debug("Extraction traceback", exc_info=True)
            return DesignTokens()

        duration_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{self.name}: extracted {tokens.total_tokens} tokens from {source_name}",
            extra={
                "source_name": source_name,
                "token_count": tokens.total_tokens,
                "duration_ms": round(duration_ms, 3),
            },
        )
        return tokens


class TokenAdapterRegistry:
    """Registry for token adapters.

    Selects the adapter for a file by asking each registered adapter in
    registration order, so more specific adapters must be registered first.
    """

    def __init__(self) -> None:
        self._adapters: list[TokenAdapter] = []

    def register(self, adapter: TokenAdapter) -> None:
        """Register a token adapter."""
        self._adapters.append(adapter)

    @property
    def adapters(self) -> list[TokenAdapter]:
        return list(self._adapters)

    def get_adapter(self, file_path: Path) -> TokenAdapter | None:
        """Get an adapter that can handle the given file.

        Returns:
            An adapter that can handle the file, or None if no adapter matches.
        """
        for adapter in self._adapters:
            if adapter.can_handle(file_path):
                return adapter
        return None

    def extract(self, file_path: Path) -> DesignTokens:
        """Extract tokens from a file using the appropriate adapter.

        Raises:
            UnsupportedSourceError: If no adapter can handle the file.
            SourceNotFoundError: If the file doesn't exist.
        """
        adapter = self.get_adapter(file_path)
        if adapter is None:
            raise UnsupportedSourceError(str(file_path))
        return adapter.extract(file_path)


def create_registry(config: "ExtractionConfig | None" = None) -> TokenAdapterRegistry:
    """Build a registry with all built-in adapters.

    Order: shadcn theme CSS (by file name), generic CSS variables, Tailwind
    config, JSON exports.
    """
    from ..classifier import get_classifier
    from ..config import ExtractionConfig
    from .css_vars import CSSVariablesAdapter
    from .export_formats import ExportFormatAdapter
    from .shadcn import ShadcnThemeAdapter
    from .tailwind import TailwindConfigAdapter

    config = config or ExtractionConfig()
    classifier = get_classifier(config.semantic_color_roles)

    registry = TokenAdapterRegistry()
    registry.register(ShadcnThemeAdapter(file_names=config.shadcn_css_names))
    registry.register(CSSVariablesAdapter(classifier=classifier))
    registry.register(TailwindConfigAdapter())
    registry.register(ExportFormatAdapter(classifier=classifier))
    return registry


_default_registry: TokenAdapterRegistry | None = None


def get_default_registry() -> TokenAdapterRegistry:
    """Get the registry built from the default configuration."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_registry()
    return _default_registry
