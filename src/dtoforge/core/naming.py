"""
Naming conventions for generated artifacts.

Contains case conversion utilities, class and file name builders, and the
relative import path computation shared by all artifact pipelines.
"""

from __future__ import annotations

import posixpath
import re

from .config import FileNamingStyle, GeneratorConfig

_WORD = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")

THUNK_PREFIX = "() =>"


def split_words(name: str) -> list[str]:
    """Split a PascalCase, camelCase, snake_case or kebab-case name into words."""
    return _WORD.findall(name)


def pascal_case(name: str) -> str:
    """Convert any casing to PascalCase, keeping acronyms intact."""
    return "".join(word[0].upper() + word[1:] for word in split_words(name))


def camel_case(name: str) -> str:
    """Convert any casing to camelCase."""
    pascal = pascal_case(name)
    words = split_words(pascal)
    if not words:
        return pascal
    return words[0].lower() + pascal[len(words[0]) :]


def snake_case(name: str) -> str:
    """Convert any casing to snake_case."""
    return "_".join(word.lower() for word in split_words(name))


def kebab_case(name: str) -> str:
    """Convert any casing to kebab-case."""
    return "-".join(word.lower() for word in split_words(name))


_FILE_CASE = {
    FileNamingStyle.CAMEL: camel_case,
    FileNamingStyle.KEBAB: kebab_case,
    FileNamingStyle.PASCAL: pascal_case,
    FileNamingStyle.SNAKE: snake_case,
}


def strip_thunk(value: str) -> str:
    """Turn ``() => Foo`` into ``Foo``; other values are returned unchanged."""
    text = value.strip()
    if text.startswith(THUNK_PREFIX):
        return text[len(THUNK_PREFIX) :].strip()
    return text


def thunk(type_name: str) -> str:
    return f"{THUNK_PREFIX} {type_name}"


def relative_import(from_dir: str, to_dir: str, filename: str) -> str:
    """
    Module specifier for ``filename`` in ``to_dir`` as seen from ``from_dir``.

    Returns:
        Specifier like ``./create-book.dto`` or ``../book/book.entity``
    """
    rel = posixpath.relpath(to_dir, from_dir)
    if rel == ".":
        return f"./{filename}"
    if not rel.startswith("."):
        rel = f"./{rel}"
    return f"{rel}/{filename}"


class NamingConventions:
    """
    Class and file names of generated artifacts.

    Example with default options and model ``BlogPost``:
        entity_name -> BlogPost, entity_filename -> blog-post.entity
        create_dto_name -> CreateBlogPostDto, create_dto_filename -> create-blog-post.dto
    """

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config
        self._file_case = _FILE_CASE[config.file_naming_style]

    def class_name(self, name: str, prefix: str = "", suffix: str = "") -> str:
        return f"{prefix}{pascal_case(name)}{suffix}"

    def file_name(self, name: str, prefix: str = "", suffix: str = "") -> str:
        return f"{self._file_case(prefix + pascal_case(name))}{suffix}"

    # Class names

    def entity_name(self, name: str) -> str:
        return self.class_name(name, self.config.entity_prefix, self.config.entity_suffix)

    def plain_dto_name(self, name: str) -> str:
        return self.class_name(name, "", self.config.dto_suffix)

    def create_dto_name(self, name: str) -> str:
        return self.class_name(name, self.config.create_dto_prefix, self.config.dto_suffix)

    def update_dto_name(self, name: str) -> str:
        return self.class_name(name, self.config.update_dto_prefix, self.config.dto_suffix)

    def connect_dto_name(self, name: str) -> str:
        return self.class_name(name, self.config.connect_dto_prefix, self.config.dto_suffix)

    def relation_input_name(self, model: str, field: str) -> str:
        """Unprefixed name of the relation input class of ``model.field``."""
        return f"{pascal_case(model)}{pascal_case(field)}RelationInput"

    # File names (without extension)

    def entity_filename(self, name: str) -> str:
        return self.file_name(name, suffix=".entity")

    def plain_dto_filename(self, name: str) -> str:
        return self.file_name(name, suffix=".dto")

    def create_dto_filename(self, name: str) -> str:
        return self.file_name(name, "Create", ".dto")

    def update_dto_filename(self, name: str) -> str:
        return self.file_name(name, "Update", ".dto")

    def connect_dto_filename(self, name: str) -> str:
        return self.file_name(name, "Connect", ".dto")
