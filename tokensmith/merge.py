"""Merging of partial token results.

Each extractor returns a partial ``DesignTokens``. Merging is shallow and
per category: later sources overwrite keys from earlier ones, and a
category missing from a source never erases what earlier sources found.
Typography and animation are merged one level deeper, per sub-map.

Order is the caller's precedence. The import pipeline merges the Tailwind
config first and CSS files after it, so stylesheets override config values.
"""

from .token_logging import LogCategory, get_category_logger
from .tokens import (
    FLAT_CATEGORY_FIELDS,
    AnimationTokens,
    DesignTokens,
    Token,
    TypographyTokens,
)

logger = get_category_logger(LogCategory.MERGE)


def _merge_maps(
    current: dict[str, Token] | None, incoming: dict[str, Token] | None
) -> dict[str, Token] | None:
    if incoming is None:
        return current
    return {**(current or {}), **incoming}


def merge_tokens(*sources: DesignTokens | None) -> DesignTokens:
    """Merge partial token results, last write wins.

    Args:
        *sources: Partial results in increasing precedence. ``None``
            entries are skipped.

    Returns:
        A new DesignTokens. Inputs are not modified. Categories absent from
        every source stay absent.
    """
    merged = DesignTokens()

    for source in sources:
        if source is None:
            continue

        for attr in FLAT_CATEGORY_FIELDS.values():
            setattr(merged, attr, _merge_maps(getattr(merged, attr), getattr(source, attr)))

        if source.typography is not None:
            current = merged.typography or TypographyTokens()
            merged.typography = TypographyTokens(
                **{
                    attr: {**getattr(current, attr), **getattr(source.typography, attr)}
                    for attr in TypographyTokens.SUB_MAPS
                }
            )

        if source.animation is not None:
            current_animation = merged.animation or AnimationTokens()
            merged.animation = AnimationTokens(
                duration={**current_animation.duration, **source.animation.duration},
                easing={**current_animation.easing, **source.animation.easing},
            )

    logger.debug(
        f"Merged {len(sources)} sources into {merged.total_tokens} tokens",
        extra={"token_count": merged.total_tokens},
    )
    return merged
