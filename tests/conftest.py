"""
Shared fixtures for the tokensmith test suite.

Provides test fixtures for:
- Sample token sources (Tailwind config, CSS, shadcn theme, JSON exports)
- Temporary project directories holding those sources
- Logging isolation between tests
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from tokensmith.token_logging import ROOT_LOGGER_NAME

# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
module.exports = {
  darkMode: ['class'],
  content: ['./src/**/*.{ts,tsx}'],
  theme: {
    extend: {
      colors: {
        border: 'hsl(var(--border))',
        primary: {
          DEFAULT: '#2563eb',
          foreground: '#ffffff',
          500: '#3b82f6',
        },
        // legacy palette
        brand: "#ff6600",
      },
      spacing: {
        '18': '4.5rem',
        '128': '32rem',
      },
      fontFamily: {
        sans: ['Inter', 'system-ui', 'sans-serif'],
        mono: ['"Fira Code"', 'monospace'],
      },
      borderRadius: {
        lg: 'var(--radius)',
        md: 'calc(var(--radius) - 2px)',
      },
      boxShadow: {
        card: '0 1px 3px rgba(0, 0, 0, 0.1)',
      },
    },
  },
  plugins: [require('tailwindcss-animate')],
}
"""

TOKENS_CSS = """/* design tokens */
:root {
  --color-primary: #2563eb;
  --background-subtle: 210 40% 98%;
  --spacing-4: 1rem;
  --radius-md: 8px;
  --shadow-sm: 0 1px 2px rgba(0,0,0,.05);
  --font-family-sans: Inter, sans-serif;
  --text-lg: 1.125rem;
  --duration-fast: 150ms;
  --ease-out: cubic-bezier(0, 0, 0.2, 1);
  --opacity-disabled: 50%;
  --z-modal: 50;
}

.button { color: var(--color-primary); }
"""

GLOBALS_CSS = """@tailwind base;

@layer base {
  :root {
    --background: 0 0% 100%;
    --primary: 222.2 47.4% 11.2%;
    --radius: 0.5rem;
  }

  .dark {
    --background: 222.2 84% 4.9%;
    --primary: 210 40% 98%;
  }
}
"""

TOKENS_STUDIO_EXPORT = {
    "global": {
        "colors": {
            "primary": {"value": "#2563eb", "type": "color", "description": "Brand"},
            "blue": {"500": {"value": "#3b82f6", "type": "color"}},
        },
        "spacing": {"sm": {"value": "8px", "type": "spacing"}},
        "borderRadius": {"md": {"value": "6px", "type": "borderRadius"}},
    },
    "$themes": [],
    "$metadata": {"tokenSetOrder": ["global"]},
}


@pytest.fixture
def tailwind_config() -> str:
    """Tailwind config text with nested colors and arrays."""
    return TAILWIND_CONFIG


@pytest.fixture
def tokens_css() -> str:
    """CSS with a :root block covering every classifier category."""
    return TOKENS_CSS


@pytest.fixture
def globals_css() -> str:
    """shadcn-style theme stylesheet."""
    return GLOBALS_CSS


@pytest.fixture
def tokens_studio_export() -> dict:
    """Tokens Studio document with a global token set."""
    return json.loads(json.dumps(TOKENS_STUDIO_EXPORT))


@pytest.fixture
def token_project(tmp_path: Path) -> Path:
    """Project directory holding one source of each kind."""
    (tmp_path / "tailwind.config.js").write_text(TAILWIND_CONFIG)
    styles = tmp_path / "styles"
    styles.mkdir()
    (styles / "tokens.css").write_text(TOKENS_CSS)
    (styles / "globals.css").write_text(GLOBALS_CSS)
    (tmp_path / "tokens.json").write_text(json.dumps(TOKENS_STUDIO_EXPORT))
    return tmp_path


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo setup_logging so caplog sees package records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TOKENSMITH_CONFIG out of the tests."""
    monkeypatch.delenv("TOKENSMITH_CONFIG", raising=False)
