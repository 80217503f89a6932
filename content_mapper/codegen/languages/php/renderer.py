"""
PHP rendering of mapper program trees.

Produces the mapper classes of the PHP management SDK: ``$this->hydrate``,
``??`` fallbacks, ``foreach`` over locales and ``\\array_map`` closures.
"""

from ...core.generator import GeneratorError
from ...core.nodes import (
    MAPPING,
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


def php_name(qualified_name: str) -> str:
    """``Contentful.Core.Api.Link`` -> ``Contentful\\Core\\Api\\Link``"""
    return qualified_name.replace(".", "\\")


def use_name(imp: Import) -> str:
    """Target of a ``use`` statement, e.g. ``App\\Entry\\Link as LinkResource``."""
    if imp.alias and imp.alias != imp.short_name:
        return f"{php_name(imp.qualified_name)} as {imp.alias}"
    return php_name(imp.qualified_name)


def render_literal(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return repr(value)


def render_type(type_ref: TypeRef) -> str:
    name = "array" if type_ref.name == MAPPING else type_ref.name
    return f"?{name}" if type_ref.nullable else name


def docblock(text: str) -> str:
    lines = ["/**"]
    lines.extend(f" * {line}" if line else " *" for line in text.split("\n"))
    lines.append(" */")
    return "\n".join(lines)


class PhpRenderer:
    """Renders a GeneratedUnit as a PHP file."""

    def __init__(self, templates: TemplateEngine, indent_size: int = 4, add_comments: bool = True):
        self.templates = templates
        self.indent_size = indent_size
        self.add_comments = add_comments

    @property
    def indent(self) -> str:
        return " " * self.indent_size

    def render(self, unit: GeneratedUnit) -> str:
        return self.templates.render_template(
            "unit.php.j2",
            {
                "namespace": php_name(unit.namespace),
                "imports": [use_name(imp) for imp in unit.imports],
                "class_code": self.render_class(unit.class_decl),
            },
        )

    def render_class(self, class_decl: ClassDecl) -> str:
        signature = f"class {class_decl.name}"
        if class_decl.extends:
            signature += f" extends {class_decl.extends}"

        return self.templates.render_template(
            "class.php.j2",
            {
                "signature": signature,
                "doc": docblock(class_decl.doc) if class_decl.doc else None,
                "methods": [self.render_method(m) for m in class_decl.methods],
                "indent_size": self.indent_size,
            },
        )

    def render_method(self, method: Method) -> str:
        params = ", ".join(self.render_param(p) for p in method.params)
        signature = f"{method.visibility} function {method.name}({params})"
        if method.return_type:
            signature += f": {render_type(method.return_type)}"

        return self.templates.render_template(
            "method.php.j2",
            {
                "signature": signature,
                "doc": self.method_doc(method),
                "body": [self.render_statement(s) for s in method.body],
                "indent_size": self.indent_size,
            },
        )

    def method_doc(self, method: Method):
        if method.doc:
            return docblock(method.doc)
        if not self.add_comments:
            return None
        if not method.is_private:
            # Public methods implement BaseMapper
            return docblock("{@inheritdoc}")

        lines = [f"@param {render_type(p.type) if p.type else 'mixed'} ${p.name}" for p in method.params]
        if method.return_type:
            lines.extend(["", f"@return {render_type(method.return_type)}"])
        return docblock("\n".join(lines))

    def render_param(self, param: Param) -> str:
        # Narrowing an inherited parameter type is a fatal error in PHP
        if param.type is None or param.type.nullable:
            return f"${param.name}"
        return f"{render_type(param.type)} ${param.name}"

    # Statements

    def render_statement(self, statement: Statement) -> str:
        if isinstance(statement, Assign):
            return f"{self.render_expr(statement.target)} = {self.render_expr(statement.value)};"

        if isinstance(statement, Loop):
            binding = f"${statement.value_var}"
            if statement.key_var:
                binding = f"${statement.key_var} => {binding}"
            head = f"foreach ({self.render_expr(statement.source)} as {binding}) {{"
            body = [self._indent(self.render_statement(s)) for s in statement.body]
            return "\n".join([head] + body + ["}"])

        if isinstance(statement, Return):
            code = f"return {self.render_expr(statement.value)};"
            return "\n" + code if statement.separated else code

        raise GeneratorError(f"Cannot render statement {type(statement).__name__}")

    # Expressions

    def render_expr(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            return render_literal(expr.value)

        if isinstance(expr, VarRef):
            return f"${expr.name}"

        if isinstance(expr, Index):
            return f"{self.render_expr(expr.target)}[{self.render_expr(expr.key)}]"

        if isinstance(expr, Call):
            args = self._render_args(expr.args)
            if expr.target is not None:
                return f"{self.render_expr(expr.target)}->{expr.name}({args})"
            return f"{expr.name}({args})"

        if isinstance(expr, New):
            return f"new {expr.type_name}({self._render_args(expr.args)})"

        if isinstance(expr, Coalesce):
            return f"{self.render_expr(expr.left)} ?? {self.render_expr(expr.right)}"

        if isinstance(expr, ClassRef):
            return f"{expr.type_name}::class"

        if isinstance(expr, MapLiteral):
            return self._render_array(expr)

        if isinstance(expr, MapEach):
            return self._render_array_map(expr)

        raise GeneratorError(f"Cannot render expression {type(expr).__name__}")

    def _render_args(self, args) -> str:
        return ", ".join(self.render_expr(arg) for arg in args)

    def _render_array(self, expr: MapLiteral) -> str:
        if not expr.entries:
            return "[]"

        lines = ["["]
        for entry in expr.entries:
            if entry.comment:
                lines.append(f"{self.indent}// {entry.comment}")
            item = f"{self.render_expr(entry.key)} => {self.render_expr(entry.value)},"
            lines.append(self._indent(item))
        lines.append("]")
        return "\n".join(lines)

    def _render_array_map(self, expr: MapEach) -> str:
        """
        ```
        \\array_map(function (array $link): Link {
            return new Link($link['sys']['id'], $link['sys']['linkType']);
        }, $value)
        ```
        """
        param = f"${expr.param}"
        if expr.param_type:
            param = f"{render_type(TypeRef(expr.param_type))} {param}"
        head = f"\\array_map(function ({param})"
        if expr.result_type:
            head += f": {expr.result_type}"

        return "\n".join(
            [
                head + " {",
                f"{self.indent}return {self.render_expr(expr.body)};",
                f"}}, {self.render_expr(expr.items)})",
            ]
        )

    def _indent(self, code: str) -> str:
        return "\n".join(self.indent + line if line else line for line in code.split("\n"))
