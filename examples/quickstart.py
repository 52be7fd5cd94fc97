"""Quickstart example for i18ntree.

This example demonstrates parsing a resource tree, resolving keys,
generating key classes and extracting the character set.

Note: Example 2 uses a permissive context, which returns sentinel text
instead of raising. Use strict=True in tests and tooling so broken keys
fail loudly.
"""

import tempfile
from pathlib import Path

from i18ntree import (
    DEFAULT_REGISTRY,
    CharsetEmitter,
    KeyClassEmitter,
    LocalizationContext,
    Resolver,
    SubstitutionError,
    parse,
)

SOURCE = """
[
  {"key": "greeting", "ja": "こんにちは、{name}！", "en": "Hello, {name}!"},
  {
    "key": "menu", "ja": "メニュー", "en": "Menu",
    "strings": [
      {"key": "start", "ja": "スタート", "en": "Start"},
      {"key": "quit-game", "ja": "終了", "en": "Quit"},
      {"key": "help",
       "ja_long": ["一行目", "二行目"],
       "en_long": ["First line", "Second line"]}
    ]
  }
]
"""

tree = parse(SOURCE)

# Example 1: Resolve key paths
print("=" * 50)
print("Example 1: Resolving Key Paths")
print("=" * 50)

resolver = Resolver(tree, DEFAULT_REGISTRY)
print(resolver.resolve("en", "menu.start"))
# Output: Start

print(resolver.resolve("ja", "greeting", {"name": "世界"}))
# Output: こんにちは、世界！

print(resolver.resolve("en", "menu.help"))
# Output: First line
#         Second line

try:
    resolver.resolve("en", "greeting", {})
except SubstitutionError as e:
    print(f"Strict error: {e.diagnostic}")
# Output: Strict error: Token '{name}' in 'greeting' has no substitution value

# Example 2: Localization context
print("\n" + "=" * 50)
print("Example 2: LocalizationContext")
print("=" * 50)

context = LocalizationContext(tree, DEFAULT_REGISTRY, language="ja")
start = context.for_key("menu.start")
print(start.get_string())
# Output: スタート

context.change_language("en")
print(start.get_string())
# Output: Start

for child in context.for_key("menu").get_children():
    print(f"{child.key}: {child.to_text()!r}")
# Output: menu.start: 'Start'
#         menu.quit-game: 'Quit'
#         menu.help: 'First line\nSecond line'

print(context.for_key("menu.missing").get_string())
# Output: String menu.missing not localized!!!!!

# Example 3: Key classes
print("\n" + "=" * 50)
print("Example 3: Generated Key Classes")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmpdir:
    output = Path(tmpdir) / "i18n_keys.py"
    KeyClassEmitter(namespace="Game").write(tree, output)
    print(output.read_text(encoding="utf-8"))

# Example 4: Character set
print("=" * 50)
print("Example 4: Character Set")
print("=" * 50)

print(CharsetEmitter(include_numeric_set=True).render(tree))
