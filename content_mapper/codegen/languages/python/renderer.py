"""
Python rendering of mapper program trees.

Method names become snake_case, private methods get a leading
underscore, and null-coalescing is spelled with ``dict.get``.
"""

import json
from collections import OrderedDict
from typing import AbstractSet, List

from ...core.generator import GeneratorError
from ...core.naming import to_snake_case
from ...core.nodes import (
    MAPPING,
    THIS,
    Assign,
    Call,
    ClassDecl,
    ClassRef,
    Coalesce,
    Expr,
    GeneratedUnit,
    Import,
    Index,
    Literal,
    Loop,
    MapEach,
    MapLiteral,
    Method,
    New,
    Param,
    Return,
    Statement,
    TypeRef,
    VarRef,
)
from ...core.templates import TemplateEngine

# Calls are split over several lines past this width
MAX_INLINE_CALL = 79


def method_name(name: str, private: bool = False) -> str:
    """Python name of a method, e.g. ``formatFields`` -> ``_format_fields``."""
    return ("_" if private else "") + to_snake_case(name)


def render_literal(value) -> str:
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


def render_type(type_ref: TypeRef) -> str:
    name = "dict" if type_ref.name == MAPPING else type_ref.name
    return f"{name} | None" if type_ref.nullable else name


def import_name(imp: Import) -> str:
    if imp.alias and imp.alias != imp.short_name:
        return f"{imp.short_name} as {imp.alias}"
    return imp.short_name


def render_imports(imports: List[Import]) -> List[str]:
    """Group imports by module, keeping first-seen order."""
    modules: "OrderedDict[str, List[str]]" = OrderedDict()
    for imp in imports:
        names = modules.setdefault(imp.module, [])
        if import_name(imp) not in names:
            names.append(import_name(imp))

    lines = []
    for module, names in modules.items():
        if module:
            lines.append(f"from {module} import {', '.join(names)}")
        else:
            lines.extend(f"import {name}" for name in names)
    return lines


class PythonRenderer:
    """Renders a GeneratedUnit as a Python module.

    ``private_methods`` names the methods of the class being rendered that
    get a leading underscore; ``render`` uses a fresh renderer per unit.
    """

    def __init__(
        self,
        templates: TemplateEngine,
        indent_size: int = 4,
        private_methods: AbstractSet[str] = frozenset(),
    ):
        self.templates = templates
        self.indent_size = indent_size
        self.private_methods = frozenset(private_methods)

    @property
    def indent(self) -> str:
        return " " * self.indent_size

    def render(self, unit: GeneratedUnit) -> str:
        private = {m.name for m in unit.class_decl.methods if m.is_private}
        return PythonRenderer(self.templates, self.indent_size, private).render_unit(unit)

    def render_unit(self, unit: GeneratedUnit) -> str:
        header = [f"Namespace {unit.namespace}."]
        if unit.class_decl.doc:
            header.extend(["", "This file was autogenerated."])

        return self.templates.render_template(
            "unit.py.j2",
            {
                "header": header,
                "imports": render_imports(list(unit.imports)),
                "class_code": self.render_class(unit.class_decl),
            },
        )

    def render_class(self, class_decl: ClassDecl) -> str:
        return self.templates.render_template(
            "class.py.j2",
            {
                "name": class_decl.name,
                "extends": class_decl.extends,
                "doc": self.render_docstring(class_decl.doc),
                "methods": [self.render_method(m) for m in class_decl.methods],
                "indent_size": self.indent_size,
            },
        )

    def render_method(self, method: Method) -> str:
        return self.templates.render_template(
            "method.py.j2",
            {
                "name": method_name(method.name, method.is_private),
                "params": ["self"] + [self.render_param(p) for p in method.params],
                "return_type": render_type(method.return_type) if method.return_type else None,
                "doc": self.render_docstring(method.doc),
                "body": "\n".join(self.render_statement(s) for s in method.body),
                "indent_size": self.indent_size,
            },
        )

    def render_param(self, param: Param) -> str:
        if param.type is None:
            return param.name
        return f"{param.name}: {render_type(param.type)}"

    def render_docstring(self, doc) -> str:
        if not doc:
            return ""
        return '"""\n' + doc + '\n"""'

    # Statements

    def render_statement(self, statement: Statement) -> str:
        if isinstance(statement, Assign):
            return f"{self.render_expr(statement.target)} = {self.render_expr(statement.value)}"

        if isinstance(statement, Loop):
            source = self.render_expr(statement.source)
            if isinstance(statement.source, Coalesce):
                source = f"({source})"
            if statement.key_var:
                head = f"for {statement.key_var}, {statement.value_var} in {source}.items():"
            else:
                head = f"for {statement.value_var} in {source}:"
            body = [self._indent(self.render_statement(s)) for s in statement.body]
            return "\n".join([head] + body)

        if isinstance(statement, Return):
            code = f"return {self.render_expr(statement.value)}"
            return "\n" + code if statement.separated else code

        raise GeneratorError(f"Cannot render statement {type(statement).__name__}")

    # Expressions

    def render_expr(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            return render_literal(expr.value)

        if isinstance(expr, VarRef):
            return "self" if expr.name == THIS else expr.name

        if isinstance(expr, Index):
            return f"{self.render_expr(expr.target)}[{self.render_expr(expr.key)}]"

        if isinstance(expr, Call):
            name = expr.name
            if expr.target is not None:
                is_this = isinstance(expr.target, VarRef) and expr.target.name == THIS
                private = is_this and expr.name in self.private_methods
                name = f"{self.render_expr(expr.target)}.{method_name(expr.name, private)}"
            return self._render_call(name, expr.args)

        if isinstance(expr, New):
            return self._render_call(expr.type_name, expr.args)

        if isinstance(expr, Coalesce):
            return self._render_coalesce(expr)

        if isinstance(expr, ClassRef):
            return expr.type_name

        if isinstance(expr, MapLiteral):
            return self._render_map(expr)

        if isinstance(expr, MapEach):
            return (
                f"[{self.render_expr(expr.body)} "
                f"for {expr.param} in {self.render_expr(expr.items)}]"
            )

        raise GeneratorError(f"Cannot render expression {type(expr).__name__}")

    def _render_coalesce(self, expr: Coalesce) -> str:
        left, right = expr.left, expr.right

        if isinstance(left, Index):
            lookup = f"{self.render_expr(left.target)}.get({self.render_expr(left.key)})"
            if isinstance(right, Literal) and right.value is None:
                return lookup
            if isinstance(right, MapLiteral) and not right.entries:
                return f"{lookup} or {{}}"

        rendered = self.render_expr(left)
        return f"{rendered} if {rendered} is not None else {self.render_expr(right)}"

    def _render_map(self, expr: MapLiteral) -> str:
        if not expr.entries:
            return "{}"

        lines = ["{"]
        for entry in expr.entries:
            if entry.comment:
                lines.append(f"{self.indent}# {entry.comment}")
            item = f"{self.render_expr(entry.key)}: {self.render_expr(entry.value)},"
            lines.append(self._indent(item))
        lines.append("}")
        return "\n".join(lines)

    def _render_call(self, name: str, args) -> str:
        rendered = [self.render_expr(arg) for arg in args]
        inline = f"{name}({', '.join(rendered)})"
        if "\n" not in inline and len(inline) <= MAX_INLINE_CALL:
            return inline

        lines = [f"{name}("]
        lines.extend(self._indent(arg) + "," for arg in rendered)
        lines.append(")")
        return "\n".join(lines)

    def _indent(self, code: str) -> str:
        return "\n".join(self.indent + line if line else line for line in code.split("\n"))
