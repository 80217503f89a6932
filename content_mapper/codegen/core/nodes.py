"""
Program tree for generated mapper classes.

A small closed set of immutable nodes. The synthesizer builds them and
each language renderer turns them into source text, so the shape of the
generated program is independent of the syntax it is written in.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

# Name of the receiver inside methods ($this, self, ...)
THIS = "this"

# Built-in type for string-keyed mappings (array in PHP, dict in Python)
MAPPING = "mapping"


# Expressions


@dataclass(frozen=True)
class Literal:
    """A scalar constant: string, number, bool or None (null)."""

    value: Any


@dataclass(frozen=True)
class VarRef:
    name: str


@dataclass(frozen=True)
class Index:
    """``target[key]``"""

    target: "Expr"
    key: "Expr"


@dataclass(frozen=True)
class Call:
    """Function call, or method call when ``target`` is set."""

    name: str
    args: Tuple["Expr", ...] = ()
    target: Optional["Expr"] = None


@dataclass(frozen=True)
class New:
    """Instantiation of ``type_name``."""

    type_name: str
    args: Tuple["Expr", ...] = ()


@dataclass(frozen=True)
class Coalesce:
    """``left ?? right``: left unless it is missing or null."""

    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class ClassRef:
    """The type identity of a class, e.g. ``Post::class``."""

    type_name: str


@dataclass(frozen=True)
class MapEntry:
    key: "Expr"
    value: "Expr"
    comment: Optional[str] = None


@dataclass(frozen=True)
class MapLiteral:
    """Literal mapping; ``MapLiteral()`` is the empty mapping."""

    entries: Tuple[MapEntry, ...] = ()


@dataclass(frozen=True)
class MapEach:
    """Apply ``body`` to every element of ``items``, bound as ``param``."""

    items: "Expr"
    param: str
    body: "Expr"
    param_type: Optional[str] = None
    result_type: Optional[str] = None


Expr = Union[Literal, VarRef, Index, Call, New, Coalesce, ClassRef, MapLiteral, MapEach]


# Statements


@dataclass(frozen=True)
class Assign:
    target: Expr
    value: Expr


@dataclass(frozen=True)
class Loop:
    """Iterate ``source`` binding each element to ``value_var``.

    With ``key_var`` set, iterates key/value pairs of a mapping.
    """

    source: Expr
    value_var: str
    body: Tuple["Statement", ...]
    key_var: Optional[str] = None


@dataclass(frozen=True)
class Return:
    value: Expr
    separated: bool = False  # Blank line before the statement


Statement = Union[Assign, Loop, Return]


# Declarations


@dataclass(frozen=True)
class TypeRef:
    name: str
    nullable: bool = False


@dataclass(frozen=True)
class Param:
    name: str
    type: Optional[TypeRef] = None


@dataclass(frozen=True)
class Method:
    name: str
    params: Tuple[Param, ...]
    body: Tuple[Statement, ...]
    return_type: Optional[TypeRef] = None
    visibility: str = "public"
    doc: Optional[str] = None

    @property
    def is_private(self) -> bool:
        return self.visibility == "private"


@dataclass(frozen=True)
class ClassDecl:
    name: str
    methods: Tuple[Method, ...]
    extends: Optional[str] = None
    doc: Optional[str] = None

    def get_method(self, name: str) -> Optional[Method]:
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(frozen=True)
class Import:
    """Import of a dotted, fully qualified name such as ``a.b.Link``.

    ``alias`` is the local name when the short name is already taken.
    """

    qualified_name: str
    alias: Optional[str] = None

    @property
    def short_name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    @property
    def module(self) -> str:
        return self.qualified_name.rpartition(".")[0]

    @property
    def local_name(self) -> str:
        return self.alias or self.short_name


@dataclass(frozen=True)
class GeneratedUnit:
    """One namespace holding imports and a single class."""

    namespace: str
    imports: Tuple[Import, ...]
    class_decl: ClassDecl

    def has_import(self, qualified_name: str) -> bool:
        return any(imp.qualified_name == qualified_name for imp in self.imports)
