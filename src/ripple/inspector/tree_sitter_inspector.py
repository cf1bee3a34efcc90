"""Tree-sitter based extraction of module imports and exports."""

from __future__ import annotations

from functools import lru_cache

from ripple.exceptions import InspectorError
from ripple.inspector.models import DEFAULT_EXPORT, SourceFacts

# Grammar loaders per detected language. JavaScript goes through the TSX
# grammar so type annotations and JSX in .js/.jsx files still parse.
_TS_LANGUAGE_LOADERS = {
    "javascript": ("tree_sitter_typescript", "language_tsx"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}

# Declarations whose `name` field is the exported binding
_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "internal_module",
    "module",
    "function_signature",
}

_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}


@lru_cache(maxsize=None)
def _get_language(language: str):
    """Get a tree-sitter Language object for the given language."""
    from tree_sitter import Language

    loader = _TS_LANGUAGE_LOADERS.get(language)
    if not loader:
        raise ValueError(f"No tree-sitter grammar for language: {language}")

    module_name, func_name = loader
    module = __import__(module_name)
    return Language(getattr(module, func_name)())


def inspect_source(file_path: str, language: str, source: str) -> SourceFacts:
    """Parse `source` and collect top-level import specifiers and export names."""
    from tree_sitter import Parser

    try:
        parser = Parser(_get_language(language))
        tree = parser.parse(source.encode("utf-8"))
    except (ImportError, ValueError) as e:
        raise InspectorError(file_path, f"tree-sitter unavailable: {e}") from e

    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        line = bad.start_point[0] + 1 if bad is not None else 0
        raise InspectorError(file_path, f"syntax error near line {line}")

    facts = SourceFacts(file_path=file_path, language=language)
    seen: set[str] = set()

    def add_export(name: str) -> None:
        if name and name not in seen:
            seen.add(name)
            facts.exports.append(name)

    for node in root.named_children:
        if node.type == "import_statement":
            specifier = _import_source(node)
            if specifier is not None:
                facts.imports.append(specifier)
        elif node.type == "export_statement":
            for name in _export_names(node):
                add_export(name)

    return facts


def _first_error(node):
    """Find the first ERROR or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _string_value(node) -> str:
    text = node.text.decode("utf-8")
    # Strip the surrounding quotes
    return text[1:-1] if len(text) >= 2 else text


def _import_source(node) -> str | None:
    source = node.child_by_field_name("source")
    if source is None:
        # `import x = require(...)` and friends are not module imports
        return None
    return _string_value(source)


def _export_names(node) -> list[str]:
    """Collect the names an export statement binds."""
    if any(child.type == "default" for child in node.children):
        return [DEFAULT_EXPORT]

    names: list[str] = []
    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        names.extend(_declaration_names(declaration))

    for child in node.named_children:
        if child.type == "namespace_export":
            # export * as name from "..."
            for exported in child.named_children:
                if exported.type == "string":
                    names.append(_string_value(exported))
                else:
                    names.append(exported.text.decode("utf-8"))
        elif child.type == "export_clause":
            for spec in child.named_children:
                if spec.type != "export_specifier":
                    continue
                exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                if exported is None:
                    continue
                if exported.type == "string":
                    names.append(_string_value(exported))
                else:
                    names.append(exported.text.decode("utf-8"))
    return names


def _declaration_names(node) -> list[str]:
    if node.type == "ambient_declaration":
        names = []
        for child in node.named_children:
            names.extend(_declaration_names(child))
        return names

    if node.type in _VARIABLE_DECLARATIONS:
        names = []
        for declarator in node.named_children:
            if declarator.type == "variable_declarator":
                target = declarator.child_by_field_name("name")
                if target is not None:
                    names.extend(_pattern_names(target))
        return names

    if node.type in _NAMED_DECLARATIONS:
        name = node.child_by_field_name("name")
        if name is not None:
            return [_string_value(name) if name.type == "string" else name.text.decode("utf-8")]
    return []


def _pattern_names(node) -> list[str]:
    """Identifiers bound by a declarator target, including destructuring."""
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [node.text.decode("utf-8")]
    if node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        return _pattern_names(value) if value is not None else []
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        return _pattern_names(left) if left is not None else []

    names = []
    for child in node.named_children:
        names.extend(_pattern_names(child))
    return names
