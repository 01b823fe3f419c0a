"""
Go source parser that builds the declaration model.

Phase 1 of the pipeline: parse Go source with tree-sitter and keep the
package name and type declarations, with Go's doc comment attachment rules.
"""

from __future__ import annotations

from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ...logging_utils import get_logger
from ..errors import LoadError, ParseError
from .nodes import CommentGroup, Field, SourceUnit, TypeDeclaration

GO_LANGUAGE = Language(tree_sitter_go.language())

logger = get_logger("parser")


class GoSourceParser:
    """Parses Go source files into SourceUnits."""

    # Statement terminators are tokens in the Go grammar; they never separate
    # a doc comment from its declaration.
    TERMINATORS = {"\n", ";", "\0"}

    def __init__(self):
        self._parser = Parser(GO_LANGUAGE)

    def parse_file(self, path: Path) -> SourceUnit:
        """
        Read and parse a Go file.

        Raises:
            LoadError: If the file cannot be read
            ParseError: If the file is not valid Go
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"cannot read {path}: {e}", path) from e
        return self.parse(text, path)

    def parse(self, text: str, path: Path | None = None) -> SourceUnit:
        """
        Parse Go source text.

        Args:
            text: The source text
            path: Path the text came from (used in messages and kept on the unit)

        Returns:
            SourceUnit with the package name and type declarations in source order
        """
        path = path or Path("<source>")
        source = text.encode("utf-8")
        root = self._parse_tree(source, path)

        unit = SourceUnit(path=path)
        for child in root.named_children:
            if child.type == "package_clause":
                unit.package_name = self._package_name(child, source)
            elif child.type == "type_declaration":
                unit.declarations.extend(self._parse_type_declaration(child, source))

        if not unit.package_name:
            raise ParseError(f"{path}: missing package clause", path, 1, 1)

        logger.debug("Parsed %s: package %s, %d type(s)", path, unit.package_name, len(unit.declarations))
        return unit

    def check_syntax(self, text: str, path: Path | None = None) -> None:
        """Raise ParseError if text is not valid Go."""
        self._parse_tree(text.encode("utf-8"), path or Path("<source>"))

    def _parse_tree(self, source: bytes, path: Path) -> Node:
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            error_node = self._first_error(root) or root
            line, column = error_node.start_point[0] + 1, error_node.start_point[1] + 1
            if error_node.is_missing:
                detail = f"missing {error_node.type}"
            else:
                detail = "syntax error"
            raise ParseError(f"{path}:{line}:{column}: {detail}", path, line, column)
        return root

    def _first_error(self, node: Node) -> Node | None:
        """Find the first ERROR or MISSING node in document order."""
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._first_error(child)
                if found is not None:
                    return found
        return None

    def _package_name(self, node: Node, source: bytes) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return self._text(child, source)
        return ""

    def _parse_type_declaration(self, node: Node, source: bytes) -> list[TypeDeclaration]:
        """Parse ``type X ...`` or ``type ( X ...; Y ... )``."""
        group_doc = self._doc_comment(node, source)

        declarations = []
        for child in node.named_children:
            if child.type not in ("type_spec", "type_alias"):
                continue
            # Outside of parentheses the spec follows the "type" keyword and has no doc of its own
            doc = self._doc_comment(child, source)
            declarations.append(self._parse_type_spec(child, source, doc, group_doc))
        return declarations

    def _parse_type_spec(
        self,
        node: Node,
        source: bytes,
        doc: CommentGroup | None,
        group_doc: CommentGroup | None,
    ) -> TypeDeclaration:
        type_node = node.child_by_field_name("type")

        if node.type == "type_alias":
            kind = "alias"
        elif type_node is None:
            kind = ""
        elif type_node.type == "struct_type":
            kind = "struct"
        elif type_node.type == "interface_type":
            kind = "interface"
        else:
            kind = type_node.type

        declaration = TypeDeclaration(
            name=self._text(node.child_by_field_name("name"), source),
            kind=kind,
            doc=doc,
            group_doc=group_doc,
            type_parameters=self._type_parameters(node, source),
            line=node.start_point[0] + 1,
        )
        if kind == "struct":
            declaration.fields = self._parse_fields(type_node, source)
        return declaration

    def _type_parameters(self, node: Node, source: bytes) -> list[str]:
        params = node.child_by_field_name("type_parameters")
        if params is None:
            return []
        names = []
        for param in params.named_children:
            names.extend(self._text(name, source) for name in param.children_by_field_name("name"))
        return names

    def _parse_fields(self, struct_node: Node, source: bytes) -> list[Field]:
        fields: list[Field] = []
        for field_list in struct_node.named_children:
            if field_list.type != "field_declaration_list":
                continue
            for decl in field_list.named_children:
                if decl.type != "field_declaration":
                    continue
                fields.extend(self._parse_field_declaration(decl, source))
        return fields

    def _parse_field_declaration(self, node: Node, source: bytes) -> list[Field]:
        type_node = node.child_by_field_name("type")
        type_text = self._text(type_node, source)
        names = node.children_by_field_name("name")

        if names:
            return [Field(name=self._text(name, source), type_text=type_text) for name in names]

        # Embedded field: "T", "*T", "pkg.T" or "T[U]"
        if any(child.type == "*" for child in node.children):
            type_text = "*" + type_text
        return [
            Field(
                type_text=type_text,
                embedded=True,
                implicit_name=self._embedded_name(type_node, source),
            )
        ]

    def _embedded_name(self, node: Node | None, source: bytes) -> str | None:
        """Return the name Go uses to address an embedded field."""
        if node is None:
            return None
        if node.type in ("type_identifier", "identifier"):
            return self._text(node, source)
        if node.type == "qualified_type":
            return self._embedded_name(node.child_by_field_name("name"), source)
        if node.type == "generic_type":
            return self._embedded_name(node.child_by_field_name("type"), source)
        if node.type == "pointer_type" and node.named_children:
            return self._embedded_name(node.named_children[0], source)
        return None

    def _doc_comment(self, node: Node, source: bytes) -> CommentGroup | None:
        """
        Collect the doc comment of a declaration.

        The doc comment is the run of comments on consecutive lines ending on
        the line just above the declaration. A comment that starts on the line
        of the preceding token trails that token and is not part of it.
        """
        comments: list[Node] = []
        anchor_line = node.start_point[0]
        sibling = self._previous_token(node)
        while sibling is not None and sibling.type == "comment" and sibling.end_point[0] >= anchor_line - 1:
            comments.append(sibling)
            anchor_line = sibling.start_point[0]
            sibling = self._previous_token(sibling)

        if comments and sibling is not None and sibling.end_point[0] == comments[-1].start_point[0]:
            comments.pop()

        if not comments:
            return None

        comments.reverse()
        return CommentGroup(
            comments=[self._text(comment, source) for comment in comments],
            line=comments[0].start_point[0] + 1,
        )

    def _previous_token(self, node: Node) -> Node | None:
        sibling = node.prev_sibling
        while sibling is not None and sibling.type in self.TERMINATORS:
            sibling = sibling.prev_sibling
        return sibling

    @staticmethod
    def _text(node: Node | None, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8")
