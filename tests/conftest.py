"""Pytest configuration for the i18ntree test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

import json
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from i18ntree import DEFAULT_REGISTRY, LanguageRegistry, ResourceTree, TreeParser, parse

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback for GitHub Actions (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED RESOURCE FIXTURES
# =============================================================================

# Stored texts keep literal backslash-n escapes ("\\n" in Python source).
SAMPLE_DATA: list[dict[str, object]] = [
    {"key": "greeting", "ja": "こんにちは、{name}！", "en": "Hello, {name}!"},
    {
        "key": "menu",
        "ja": "メニュー",
        "en": "Menu",
        "strings": [
            {"key": "start", "ja": "スタート", "en": "Start"},
            {"key": "quit-game", "ja": "終了", "en": "Quit"},
            {
                "key": "help",
                "ja_long": ["一行目", "二行目"],
                "en_long": ["First line", "Second line"],
            },
        ],
    },
    {
        "key": "tips",
        "strings": [
            {"key": "tip1", "ja": "ヒント\\n二行", "en": "Tip\\nTwo lines"},
            {
                "key": "joined",
                "exclude_newline": True,
                "ja_long": ["あ", "い"],
                "en_long": ["a", "b"],
            },
        ],
    },
]

SAMPLE_SOURCE: str = json.dumps(SAMPLE_DATA, ensure_ascii=False, indent=2)


@pytest.fixture
def registry() -> LanguageRegistry:
    """Built-in ja/en registry (fallback en)."""
    return DEFAULT_REGISTRY


@pytest.fixture
def sample_source() -> str:
    """JSON text of the shared sample resource."""
    return SAMPLE_SOURCE


@pytest.fixture
def sample_tree(registry: LanguageRegistry) -> ResourceTree:
    """Parsed shared sample resource."""
    return parse(SAMPLE_SOURCE, registry)


# =============================================================================
# DEEP NESTING
# =============================================================================

# Branch levels in deep_data; well past the default recursion limit of 1000.
DEEP_NESTING = 2000


@pytest.fixture
def deep_data() -> list[dict[str, object]]:
    """Decoded resource with one leaf under DEEP_NESTING nested branches.

    Key paths run level0.level1. ... .level1999.leaf.
    """
    nodes: list[dict[str, object]] = [{"key": "leaf", "ja": "深い", "en": "deep"}]
    for level in reversed(range(DEEP_NESTING)):
        nodes = [{"key": f"level{level}", "strings": nodes}]
    return nodes


@pytest.fixture
def deep_tree(deep_data: list[dict[str, object]], registry: LanguageRegistry) -> ResourceTree:
    """deep_data parsed against the built-in registry."""
    return TreeParser(registry).parse_data(deep_data)
