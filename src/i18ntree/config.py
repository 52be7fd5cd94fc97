"""Generator configuration from pyproject.toml.

Settings live in the [tool.i18ntree] table:

    [tool.i18ntree]
    source = "resources/strings.json"
    languages = "resources/languages.json"
    output = "src/game/i18n_keys.py"
    namespace = "game"
    indent_width = 4
    include_numeric = true
    charset_output = "build/charset.txt"

Relative paths are resolved against the directory containing
pyproject.toml. Command-line flags override file values.

Python 3.13+.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from i18ntree.constants import DEFAULT_INDENT_WIDTH

__all__ = ["CONFIG_TABLE", "GeneratorConfig", "load_config"]

logger = logging.getLogger(__name__)

CONFIG_TABLE: str = "i18ntree"

_PATH_FIELDS: frozenset[str] = frozenset({"source", "languages", "output", "charset_output"})


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Generator settings.

    Attributes:
        source: Resource JSON file
        languages: Language registry file (None: built-in default)
        output: Key class module to generate
        namespace: Dotted wrapper classes for the key classes
        indent_width: Spaces per indentation level in generated code
        include_numeric: Add digits and number punctuation to the charset
        charset_output: File to write the character set to (None: stdout)
    """

    source: Path | None = None
    languages: Path | None = None
    output: Path | None = None
    namespace: str | None = None
    indent_width: int = DEFAULT_INDENT_WIDTH
    include_numeric: bool = False
    charset_output: Path | None = None

    def __post_init__(self) -> None:
        """Validate field types and values.

        Raises:
            ValueError: On a wrong type or an out-of-range value
        """
        # bool is an int subclass; reject it explicitly
        if not isinstance(self.indent_width, int) or isinstance(self.indent_width, bool):
            msg = f"indent_width must be an integer, got {self.indent_width!r}"
            raise ValueError(msg)
        if self.indent_width < 1:
            msg = f"indent_width must be positive, got {self.indent_width}"
            raise ValueError(msg)
        if not isinstance(self.include_numeric, bool):
            msg = f"include_numeric must be a boolean, got {self.include_numeric!r}"
            raise ValueError(msg)
        if self.namespace is not None and not isinstance(self.namespace, str):
            msg = f"namespace must be a string, got {self.namespace!r}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(
        cls, table: dict[str, object], base_dir: Path | None = None
    ) -> GeneratorConfig:
        """Build a config from a [tool.i18ntree] table.

        Args:
            table: Decoded TOML table
            base_dir: Directory relative paths are resolved against

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(table) - known)
        if unknown:
            msg = f"Unknown [tool.{CONFIG_TABLE}] setting(s): {', '.join(unknown)}"
            raise ValueError(msg)

        values: dict[str, object] = {}
        for name, value in table.items():
            if name in _PATH_FIELDS:
                if not isinstance(value, str):
                    msg = f"{name} must be a path string, got {value!r}"
                    raise ValueError(msg)
                path = Path(value)
                if base_dir is not None and not path.is_absolute():
                    path = base_dir / path
                values[name] = path
            else:
                values[name] = value
        return cls(**values)  # type: ignore[arg-type]


def load_config(path: str | Path) -> GeneratorConfig:
    """Load generator settings from a pyproject.toml file.

    A file without a [tool.i18ntree] table yields the defaults.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the TOML is invalid or settings are wrong
    """
    config_path = Path(path)
    with config_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {config_path}: {e}"
            raise ValueError(msg) from e

    table = data.get("tool", {}).get(CONFIG_TABLE)
    if table is None:
        logger.debug("No [tool.%s] table in %s, using defaults", CONFIG_TABLE, config_path)
        return GeneratorConfig()
    if not isinstance(table, dict):
        msg = f"[tool.{CONFIG_TABLE}] in {config_path} must be a table"
        raise ValueError(msg)
    return GeneratorConfig.from_mapping(table, config_path.parent)
