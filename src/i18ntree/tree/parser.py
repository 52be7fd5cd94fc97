"""Resource tree parser.

Builds a ResourceTree from JSON resource text against a LanguageRegistry,
enforcing key and translation-completeness rules.

Resource format:
    [
        {
            "key": "menu",
            "strings": [
                {"key": "start", "ja": "スタート", "en": "Start"},
                {
                    "key": "help",
                    "ja_long": ["一行目", "二行目"],
                    "en_long": ["First line", "Second line"]
                }
            ]
        }
    ]

Per registered language, "<code>" holds single-line text and "<code>_long"
an array of lines joined with a newline ("" when "exclude_newline" is true).
The single-line field wins when both are present.

Error handling:
    Every violation raises a TreeError subclass; no partial tree is returned.
    Naming-convention problems are logged and collected as warnings.

Nesting:
    Nested "strings" arrays are parsed with an explicit stack, so depth
    has no limit other than available memory. Only the json module's
    decoder, used by parse(), recurses; parse_data() accepts decoded data
    of any depth.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from i18ntree.constants import (
    CHILDREN_FIELD,
    EXCLUDE_NEWLINE_FIELD,
    KEY_FIELD,
    LONG_SUFFIX,
    MAX_SOURCE_SIZE,
)
from i18ntree.core.hashing import content_hash
from i18ntree.core.identifiers import is_valid_key, to_title_case
from i18ntree.diagnostics import (
    ErrorTemplate,
    IncompleteTranslationError,
    InvalidKeyError,
    MalformedSourceError,
    MissingKeyError,
    ValidationWarning,
)
from i18ntree.enums import WarningCode
from i18ntree.languages import DEFAULT_REGISTRY, LanguageRegistry

from .nodes import ResourceNode, ResourceTree, join_key_path

__all__ = ["TreeParser", "parse", "parse_file"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    """One array of resource objects being parsed.

    key and texts belong to the branch that owns the array; they are
    unused for the top-level frame.
    """

    items: list[object]
    parent_path: str | None
    key: str = ""
    texts: dict[str, str] = field(default_factory=dict)
    index: int = 0
    nodes: list[ResourceNode] = field(default_factory=list)
    seen_keys: set[str] = field(default_factory=set)


def _check_encodable(text: str, name: str, key_path: str) -> None:
    """Reject text that cannot be written as UTF-8 (lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedSourceError(
            ErrorTemplate.malformed_source(
                f"'{name}' contains a lone surrogate at position {e.start}", key_path
            )
        ) from e


class TreeParser:
    """Parses resource sources into immutable ResourceTree objects.

    Stateless between calls: all per-parse state (collected warnings) is
    local to parse(), so one parser may be shared across threads.

    Example:
        >>> parser = TreeParser(DEFAULT_REGISTRY)
        >>> tree = parser.parse('[{"key": "hello", "ja": "こんにちは", "en": "Hello"}]')
        >>> tree.root("hello").texts["en"]
        'Hello'
    """

    __slots__ = ("_languages", "_max_source_size")

    def __init__(
        self,
        languages: LanguageRegistry = DEFAULT_REGISTRY,
        *,
        max_source_size: int | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            languages: Registry every node is validated against
            max_source_size: Maximum source length in characters
                (default: MAX_SOURCE_SIZE)
        """
        self._languages = languages
        self._max_source_size = max_source_size if max_source_size is not None else MAX_SOURCE_SIZE

    @property
    def languages(self) -> LanguageRegistry:
        """Registry this parser validates against."""
        return self._languages

    def parse(self, source: str | bytes) -> ResourceTree:
        """Parse JSON resource text.

        Args:
            source: Raw resource text (bytes are decoded as UTF-8)

        Returns:
            Immutable ResourceTree whose source_hash is the hash of the text

        Raises:
            MalformedSourceError: Invalid JSON or structure, text that is not valid
                Unicode, or nesting the JSON decoder cannot handle
            MissingKeyError: Object without key
            InvalidKeyError: Key fails the character-class check
            IncompleteTranslationError: Text for only part of the languages
        """
        if isinstance(source, bytes):
            try:
                source = source.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise MalformedSourceError(
                    ErrorTemplate.malformed_source(f"not valid UTF-8: {e}")
                ) from e

        if len(source) > self._max_source_size:
            raise MalformedSourceError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size)
            )

        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise MalformedSourceError(ErrorTemplate.malformed_source(f"invalid JSON: {e}")) from e
        except RecursionError as e:
            # The json decoder recurses per nested array or object
            raise MalformedSourceError(
                ErrorTemplate.malformed_source("nesting too deep for the JSON decoder")
            ) from e

        return self.parse_data(data, source_hash=content_hash(source))

    def parse_data(self, data: object, *, source_hash: str = "") -> ResourceTree:
        """Build a tree from already-decoded JSON data.

        Args:
            data: Decoded JSON (must be a list of dicts)
            source_hash: Hash to record; computed from the nodes if empty

        Returns:
            Immutable ResourceTree
        """
        warnings: list[ValidationWarning] = []
        roots = self._parse_nodes(data, warnings)
        tree = ResourceTree(
            roots=roots,
            languages=self._languages.codes,
            source_hash=source_hash,
            warnings=tuple(warnings),
        )
        logger.debug(
            "Parsed resource tree: %d root(s), %d warning(s)", len(roots), len(warnings)
        )
        return tree

    def _parse_nodes(
        self, data: object, warnings: list[ValidationWarning]
    ) -> tuple[ResourceNode, ...]:
        """Parse the top-level array and every nested 'strings' array.

        Arrays are worked through with an explicit stack of frames, so
        nesting depth is bounded by memory only. A branch node is built
        once the last of its children has been parsed.
        """
        stack = [_Frame(self._check_array(data, None), None)]
        while True:
            frame = stack[-1]
            if frame.index < len(frame.items):
                index = frame.index
                frame.index += 1
                item = frame.items[index]
                if not isinstance(item, dict):
                    raise MalformedSourceError(
                        ErrorTemplate.malformed_source(
                            f"element #{index} is {type(item).__name__}, expected an object",
                            frame.parent_path,
                        )
                    )
                key, key_path, texts, children_data = self._parse_fields(
                    item, index, frame.parent_path, warnings
                )
                if children_data is None:
                    self._register(frame, ResourceNode(key=key, texts=texts), warnings)
                else:
                    items = self._check_array(children_data, key_path)
                    stack.append(_Frame(items, key_path, key, texts))
                continue

            stack.pop()
            if not stack:
                return tuple(frame.nodes)
            branch = ResourceNode(key=frame.key, texts=frame.texts, children=tuple(frame.nodes))
            self._register(stack[-1], branch, warnings)

    @staticmethod
    def _check_array(items: object, parent_path: str | None) -> list[object]:
        if not isinstance(items, list):
            reason = (
                f"'{CHILDREN_FIELD}' must be an array of objects"
                if parent_path
                else "top level must be an array of objects"
            )
            raise MalformedSourceError(ErrorTemplate.malformed_source(reason, parent_path))
        return items

    @staticmethod
    def _register(frame: _Frame, node: ResourceNode, warnings: list[ValidationWarning]) -> None:
        """Append a finished node to its sibling list."""
        key_path = join_key_path(frame.parent_path, node.key)
        if node.key in frame.seen_keys:
            logger.warning("Duplicate key '%s'; only the first one is addressable", key_path)
            warnings.append(
                ValidationWarning(
                    WarningCode.DUPLICATE_KEY,
                    f"Duplicate key '{node.key}'; only the first one is addressable",
                    key_path,
                )
            )
        frame.seen_keys.add(node.key)
        frame.nodes.append(node)
        logger.debug("Registered node: %s", key_path)

    def _parse_fields(
        self,
        item: dict[str, object],
        index: int,
        parent_path: str | None,
        warnings: list[ValidationWarning],
    ) -> tuple[str, str, dict[str, str], object | None]:
        """Validate one resource object.

        Returns:
            (key, key_path, texts, raw children or None)
        """
        key = item.get(KEY_FIELD)
        if key is None:
            raise MissingKeyError(ErrorTemplate.missing_key(parent_path, index))
        if not isinstance(key, str) or not is_valid_key(key):
            raise InvalidKeyError(ErrorTemplate.invalid_key(key, parent_path))

        key_path = join_key_path(parent_path, key)

        if key == to_title_case(key):
            logger.warning(
                "A 'TitleCase' key (%s) was found. This causes trouble with key class "
                "generation. 'camelCase' is recommended.",
                key_path,
            )
            warnings.append(
                ValidationWarning(
                    WarningCode.TITLE_CASE_KEY,
                    f"Key '{key}' equals its TitleCase form; 'camelCase' is recommended",
                    key_path,
                )
            )

        exclude_newline = item.get(EXCLUDE_NEWLINE_FIELD, False)
        if not isinstance(exclude_newline, bool):
            raise MalformedSourceError(
                ErrorTemplate.malformed_source(
                    f"'{EXCLUDE_NEWLINE_FIELD}' must be a boolean", key_path
                )
            )

        texts = self._collect_texts(item, key_path, exclude_newline)

        codes = self._languages.codes
        if texts and len(texts) != len(codes):
            missing = tuple(code for code in codes if code not in texts)
            raise IncompleteTranslationError(
                ErrorTemplate.incomplete_translation(key_path, missing, tuple(texts))
            )

        children_data = item.get(CHILDREN_FIELD)
        if not texts and children_data is None:
            raise MalformedSourceError(ErrorTemplate.empty_node(key_path, codes))

        return key, key_path, texts, children_data

    def _collect_texts(
        self, item: dict[str, object], key_path: str, exclude_newline: bool
    ) -> dict[str, str]:
        """Build language code -> text in registry order."""
        joiner = "" if exclude_newline else "\n"
        texts: dict[str, str] = {}
        for code in self._languages.codes:
            one_liner = item.get(code)
            multi_liner = item.get(f"{code}{LONG_SUFFIX}")

            if one_liner is not None:
                if not isinstance(one_liner, str):
                    raise MalformedSourceError(
                        ErrorTemplate.malformed_source(f"'{code}' must be a string", key_path)
                    )
                _check_encodable(one_liner, code, key_path)
                texts[code] = one_liner
            elif multi_liner is not None:
                if not isinstance(multi_liner, list) or not all(
                    isinstance(line, str) for line in multi_liner
                ):
                    raise MalformedSourceError(
                        ErrorTemplate.malformed_source(
                            f"'{code}{LONG_SUFFIX}' must be an array of strings", key_path
                        )
                    )
                # An empty array counts as absent
                if multi_liner:
                    text = joiner.join(multi_liner)
                    _check_encodable(text, f"{code}{LONG_SUFFIX}", key_path)
                    texts[code] = text
        return texts


def parse(source: str | bytes, languages: LanguageRegistry = DEFAULT_REGISTRY) -> ResourceTree:
    """Parse resource text into a ResourceTree.

    Convenience wrapper around TreeParser(languages).parse(source).
    """
    return TreeParser(languages).parse(source)


def parse_file(path: str | Path, languages: LanguageRegistry = DEFAULT_REGISTRY) -> ResourceTree:
    """Read a UTF-8 resource file and parse it.

    Raises:
        OSError: If the file cannot be read
        TreeError: If the content is invalid
    """
    source = Path(path).read_bytes()
    logger.info("Parsing resource file %s", path)
    return TreeParser(languages).parse(source)
