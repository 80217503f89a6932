"""
Mapper class synthesis.

Walks a content type schema and builds the program tree of its mapper
class: a public ``map`` method that hydrates the resource and a private
``formatFields`` method that converts every declared field.
"""

from dataclasses import dataclass
from typing import List, Optional, Set

from .naming import to_studly_case
from .nodes import (
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
    MapEntry,
    MapLiteral,
    Method,
    New,
    Param,
    Return,
    Statement,
    TypeRef,
    VarRef,
)
from .schema import ContentTypeSchema, FieldKind, FieldSchema
from ...logging_config import get_logger

logger = get_logger(__name__)

MAPPER_SUFFIX = "Mapper"
RESOURCE_SUFFIX = "Resource"
FIELDS_COMMENT = "Delegate the formatting of all fields"


@dataclass(frozen=True)
class RuntimeTypes:
    """Dotted qualified names of the types generated mappers depend on."""

    base_mapper: str
    system_properties: str
    link: str
    timestamp: str

    @staticmethod
    def short(qualified_name: str) -> str:
        return qualified_name.rpartition(".")[2]

    def short_names(self) -> Set[str]:
        return {
            self.short(name)
            for name in (self.base_mapper, self.system_properties, self.link, self.timestamp)
        }


@dataclass
class ImportSet:
    """Auxiliary types referenced while building one class.

    Created per generation call; builders only ever set the flags.
    """

    references_link: bool = False
    references_date: bool = False


def class_name_for(content_type_id: str) -> str:
    """Name of the resource class for a content type."""
    return to_studly_case(content_type_id)


def mapper_name_for(content_type_id: str) -> str:
    """Name of the mapper class for a content type."""
    return class_name_for(content_type_id) + MAPPER_SUFFIX


def qualify(namespace: str, name: str) -> str:
    return ".".join(part for part in (namespace, name) if part)


# Statement builders


def _field_slot(field: FieldSchema) -> Index:
    return Index(VarRef("fields"), Literal(field.id))


def _data_slot(field: FieldSchema) -> Index:
    return Index(VarRef("data"), Literal(field.id))


def _sys_value(var_name: str, key: str) -> Index:
    return Index(Index(VarRef(var_name), Literal("sys")), Literal(key))


def new_link(var_name: str, link_type: str) -> New:
    """``new Link($var['sys']['id'], $var['sys']['linkType'])``"""
    return New(link_type, (_sys_value(var_name, "id"), _sys_value(var_name, "linkType")))


def default_assignment(field: FieldSchema) -> List[Statement]:
    """``$fields['name'] = $data['name'] ?? null``"""
    return [Assign(_field_slot(field), Coalesce(_data_slot(field), Literal(None)))]


def foreach_assignment(field: FieldSchema, expr: Expr) -> List[Statement]:
    """
    Per-locale conversion of one field.

    ```
    $fields['name'] = [];
    foreach ($data['name'] ?? [] as $locale => $value) {
        $fields['name'][$locale] = {{ expr }};
    }
    ```
    """
    return [
        Assign(_field_slot(field), MapLiteral()),
        Loop(
            source=Coalesce(_data_slot(field), MapLiteral()),
            key_var="locale",
            value_var="value",
            body=(Assign(Index(_field_slot(field), VarRef("locale")), expr),),
        ),
    ]


def link_assignment(field: FieldSchema, link_type: str) -> List[Statement]:
    return foreach_assignment(field, new_link("value", link_type))


def link_array_assignment(field: FieldSchema, link_type: str) -> List[Statement]:
    """Every element of each locale's list becomes a Link."""
    return foreach_assignment(
        field,
        MapEach(
            items=VarRef("value"),
            param="link",
            body=new_link("link", link_type),
            param_type=MAPPING,
            result_type=link_type,
        ),
    )


def date_assignment(field: FieldSchema, timestamp_type: str) -> List[Statement]:
    return foreach_assignment(field, New(timestamp_type, (VarRef("value"),)))


class MapperSynthesizer:
    """Builds the program tree of a mapper class for a content type.

    Holds configuration only; everything a call accumulates lives in
    values local to that call.
    """

    def __init__(self, runtime_types: RuntimeTypes, add_comments: bool = True):
        self.runtime_types = runtime_types
        self.add_comments = add_comments

    @property
    def link_type(self) -> str:
        return RuntimeTypes.short(self.runtime_types.link)

    @property
    def timestamp_type(self) -> str:
        return RuntimeTypes.short(self.runtime_types.timestamp)

    def build(self, schema: ContentTypeSchema, namespace: str) -> GeneratedUnit:
        """
        Build the unit for one content type.

        Args:
            schema: Content type to generate a mapper for
            namespace: Namespace of the resource classes

        Returns:
            GeneratedUnit in the ``<namespace>.Mapper`` namespace
        """
        uses = ImportSet()
        resource = self.resource_import(schema, namespace)
        class_decl = self.build_class(schema, uses, resource.local_name)
        imports = self.build_imports(schema, namespace, uses)

        logger.debug(
            "Built %s (%d fields, link=%s, date=%s)",
            class_decl.name,
            len(schema.fields),
            uses.references_link,
            uses.references_date,
        )

        return GeneratedUnit(
            namespace=qualify(namespace, MAPPER_SUFFIX),
            imports=tuple(imports),
            class_decl=class_decl,
        )

    def resource_import(self, schema: ContentTypeSchema, namespace: str) -> Import:
        """Import of the resource class, aliased if a runtime type has its name."""
        class_name = class_name_for(schema.id)
        qualified_name = qualify(namespace, class_name)
        if class_name in self.runtime_types.short_names():
            return Import(qualified_name, alias=class_name + RESOURCE_SUFFIX)
        return Import(qualified_name)

    def build_imports(
        self, schema: ContentTypeSchema, namespace: str, uses: ImportSet
    ) -> List[Import]:
        names = [
            self.runtime_types.base_mapper,
            self.runtime_types.system_properties,
        ]
        if uses.references_date:
            names.append(self.runtime_types.timestamp)
        if uses.references_link:
            names.append(self.runtime_types.link)

        return [self.resource_import(schema, namespace)] + [Import(name) for name in names]

    def build_class(
        self, schema: ContentTypeSchema, uses: ImportSet, resource_name: Optional[str] = None
    ) -> ClassDecl:
        class_name = class_name_for(schema.id)
        doc = None
        if self.add_comments:
            doc = f"{class_name}{MAPPER_SUFFIX} class.\n\nThis class was autogenerated."

        return ClassDecl(
            name=class_name + MAPPER_SUFFIX,
            extends=RuntimeTypes.short(self.runtime_types.base_mapper),
            methods=(
                self.build_map_method(resource_name or class_name),
                self.build_format_method(schema, uses),
            ),
            doc=doc,
        )

    def build_map_method(self, class_name: str) -> Method:
        """
        ```
        public function map($resource, array $data): ClassName
        {
            return $this->hydrate($resource ?? ClassName::class, [
                'sys' => new SystemProperties($data['sys']),
                // Delegate the formatting of all fields
                'fields' => $this->formatFields($data['fields'] ?? []),
            ]);
        }
        ```
        """
        system_properties = RuntimeTypes.short(self.runtime_types.system_properties)
        payload = MapLiteral(
            (
                MapEntry(
                    Literal("sys"),
                    New(system_properties, (Index(VarRef("data"), Literal("sys")),)),
                ),
                MapEntry(
                    Literal("fields"),
                    Call(
                        "formatFields",
                        (Coalesce(Index(VarRef("data"), Literal("fields")), MapLiteral()),),
                        target=VarRef(THIS),
                    ),
                    comment=FIELDS_COMMENT if self.add_comments else None,
                ),
            )
        )
        hydrate = Call(
            "hydrate",
            (Coalesce(VarRef("resource"), ClassRef(class_name)), payload),
            target=VarRef(THIS),
        )

        return Method(
            name="map",
            params=(
                Param("resource", TypeRef(class_name, nullable=True)),
                Param("data", TypeRef(MAPPING)),
            ),
            body=(Return(hydrate),),
            return_type=TypeRef(class_name),
            visibility="public",
        )

    def build_format_method(self, schema: ContentTypeSchema, uses: ImportSet) -> Method:
        """
        ```
        private function formatFields(array $data): array
        {
            $fields = [];
            // One fragment per field

            return $fields;
        }
        ```
        """
        body: List[Statement] = [Assign(VarRef("fields"), MapLiteral())]
        for field in schema.fields:
            body.extend(self.build_field_assignment(field, uses))
        body.append(Return(VarRef("fields"), separated=True))

        return Method(
            name="formatFields",
            params=(Param("data", TypeRef(MAPPING)),),
            body=tuple(body),
            return_type=TypeRef(MAPPING),
            visibility="private",
        )

    def build_field_assignment(self, field: FieldSchema, uses: ImportSet) -> List[Statement]:
        """Pick the conversion for a field; unknown kinds pass through."""
        if field.kind == FieldKind.LINK:
            uses.references_link = True
            return link_assignment(field, self.link_type)

        if field.kind == FieldKind.ARRAY:
            if field.is_link_array:
                uses.references_link = True
                return link_array_assignment(field, self.link_type)

            return default_assignment(field)

        if field.kind == FieldKind.DATE:
            uses.references_date = True
            return date_assignment(field, self.timestamp_type)

        return default_assignment(field)
