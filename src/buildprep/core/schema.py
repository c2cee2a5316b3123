"""Relational schema model and the reference table catalog.

These models describe tables in a simple, immutable form and know how to
render their own DDL. They are free of file-system and CLI concerns; writing
the scripts to disk lives in ``buildprep.core.scripts``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from buildprep.core.errors import CatalogError

CODE_COLUMN_NAME = "CODE"


@dataclass(frozen=True)
class Column:
    """
    A single column specification.

    Attributes:
        name: Column name as written in SQL.
        sql_type: SQL type, e.g. ``VARCHAR(60)``.
        constraints: Column constraints in the order they are rendered,
                     e.g. ``("NOT NULL",)`` or ``("DEFAULT 0",)``.
    """

    name: str
    sql_type: str
    constraints: tuple[str, ...] = ()

    def render(self) -> str:
        return " ".join((self.name, self.sql_type, *self.constraints))


@dataclass(frozen=True)
class ForeignKey:
    """A foreign-key reference from one of a table's columns to another table."""

    column: str
    references: str
    referenced_column: str = CODE_COLUMN_NAME

    def render(self) -> str:
        return (
            f"FOREIGN KEY({self.column}) "
            f"REFERENCES {self.references}({self.referenced_column})"
        )


@dataclass(frozen=True)
class TableDefinition:
    """
    Represents one relational table.

    Attributes:
        name: Unique table name (upper-case by convention).
        columns: Ordered column specifications.
        foreign_keys: References to other tables of the same catalog.
    """

    name: str
    columns: tuple[Column, ...]
    foreign_keys: tuple[ForeignKey, ...] = ()

    @property
    def script_name(self) -> str:
        """File name of this table's script: lower-case, hyphenated, ``.sql``."""
        return f"{self.name.lower().replace('_', '-')}.sql"

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Distinct referenced table names, in first-reference order."""
        return tuple(dict.fromkeys(fk.references for fk in self.foreign_keys))

    def create_statement(self) -> str:
        parts = [c.render() for c in self.columns]
        parts.extend(fk.render() for fk in self.foreign_keys)
        return f"CREATE TABLE {self.name}({', '.join(parts)});"

    def drop_statement(self) -> str:
        return f"DROP TABLE IF EXISTS {self.name};"


@dataclass(frozen=True)
class SchemaCatalog:
    """
    Ordered, immutable collection of table definitions.

    The declared order is the creation order: a table may only reference
    tables declared before it. This is validated when the catalog is built,
    so every catalog instance can be scripted as-is.
    """

    tables: tuple[TableDefinition, ...]
    _by_name: dict[str, TableDefinition] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        tables = tuple(self.tables)
        object.__setattr__(self, "tables", tables)
        object.__setattr__(self, "_by_name", _validate(tables))

    def __iter__(self) -> Iterator[TableDefinition]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._by_name

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.tables]

    def get(self, name: str) -> TableDefinition:
        """Return a table by name (case-insensitive)."""
        try:
            return self._by_name[name.upper()]
        except KeyError:
            raise KeyError(f"Unknown table: {name}") from None

    def creation_order(self) -> list[TableDefinition]:
        return list(self.tables)

    def drop_order(self) -> list[TableDefinition]:
        """Dependents first, so drops succeed against a schema with foreign keys."""
        return list(reversed(self.tables))

    def drop_script(self) -> str:
        """All drop clauses on one line, separated by single spaces."""
        return " ".join(t.drop_statement() for t in self.drop_order())


def _validate(tables: Iterable[TableDefinition]) -> dict[str, TableDefinition]:
    """Check names, foreign-key targets and declaration order."""
    seen: dict[str, TableDefinition] = {}
    for table in tables:
        if not table.name or not table.name.strip():
            raise CatalogError("Table names must not be empty.")
        key = table.name.upper()
        if key in seen:
            raise CatalogError(f"Duplicate table name: {table.name}")
        if not table.columns:
            raise CatalogError(f"Table {table.name} has no columns.")

        column_names = {c.name for c in table.columns}
        for fk in table.foreign_keys:
            if fk.column not in column_names:
                raise CatalogError(
                    f"Table {table.name}: foreign key column {fk.column} is not defined."
                )
            target = seen.get(fk.references.upper())
            if target is None:
                raise CatalogError(
                    f"Table {table.name} references {fk.references}, "
                    "which is not declared before it in the catalog."
                )
            if fk.referenced_column not in {c.name for c in target.columns}:
                raise CatalogError(
                    f"Table {table.name} references missing column "
                    f"{fk.references}.{fk.referenced_column}."
                )
        seen[key] = table
    return seen


def select_tables(catalog: SchemaCatalog, names: Iterable[str]) -> SchemaCatalog:
    """
    Build a sub-catalog holding the requested tables and everything they depend on.

    The result keeps the parent catalog's order, so it stays valid.

    Raises:
        KeyError: If a requested name is not part of the catalog.
    """
    wanted: set[str] = set()
    pending = [catalog.get(n).name for n in names]
    while pending:
        name = pending.pop()
        if name in wanted:
            continue
        wanted.add(name)
        pending.extend(catalog.get(name).dependencies)
    return SchemaCatalog(tuple(t for t in catalog if t.name in wanted))


def _code_column() -> Column:
    return Column(CODE_COLUMN_NAME, "INT", ("PRIMARY KEY", "AUTO_INCREMENT"))


def _names(width: int, *, aname_required: bool = False) -> tuple[Column, Column]:
    """Arabic / English name columns shared by most tables."""
    return (
        Column("ANAME", f"VARCHAR({width})", ("NOT NULL",) if aname_required else ()),
        Column("ENAME", f"VARCHAR({width})", () if aname_required else ("NOT NULL",)),
    )


def default_catalog() -> SchemaCatalog:
    """Return the reference seven-table inventory catalog."""
    brands = TableDefinition("ITEM_BRANDS", (_code_column(), *_names(60)))
    groups = TableDefinition("ITEM_GROUPS", (_code_column(), *_names(60)))
    subgroups = TableDefinition(
        "ITEM_SUBGROUPS",
        (
            _code_column(),
            *_names(60, aname_required=True),
            Column("GROUP_CODE", "INT", ("NOT NULL",)),
        ),
        (ForeignKey("GROUP_CODE", "ITEM_GROUPS"),),
    )
    subgroups1 = TableDefinition(
        "ITEM_SUBGROUPS1",
        (
            _code_column(),
            *_names(60),
            Column("SUBGROUP_CODE", "INT", ("NOT NULL",)),
        ),
        (ForeignKey("SUBGROUP_CODE", "ITEM_SUBGROUPS"),),
    )
    units = TableDefinition(
        "UNITS",
        (
            _code_column(),
            *_names(18),
            Column("UNIT_QUANTITY", "INT", ("NOT NULL",)),
        ),
    )
    items = TableDefinition(
        "ITEMS",
        (
            _code_column(),
            *_names(60),
            Column("GROUP_CODE", "INT", ("NOT NULL",)),
            Column("SUBGROUP_CODE", "INT"),
            Column("SUBGROUP1_CODE", "INT"),
            Column("UNIT_CODE", "INT", ("NOT NULL",)),
            Column("UNIT_CODE_2", "INT"),
            Column("UNIT_CODE_3", "INT"),
            Column("BRAND_CODE", "INT"),
            Column("ITEM_DESC", "VARCHAR(100)"),
            Column("AVAILABLE_QTY", "INT", ("DEFAULT 0",)),
        ),
        (
            ForeignKey("UNIT_CODE", "UNITS"),
            ForeignKey("UNIT_CODE_2", "UNITS"),
            ForeignKey("UNIT_CODE_3", "UNITS"),
            ForeignKey("GROUP_CODE", "ITEM_GROUPS"),
            ForeignKey("SUBGROUP_CODE", "ITEM_SUBGROUPS"),
            ForeignKey("SUBGROUP1_CODE", "ITEM_SUBGROUPS1"),
            ForeignKey("BRAND_CODE", "ITEM_BRANDS"),
        ),
    )
    year_source = TableDefinition(
        "YEAR_SOURCE",
        (
            Column(CODE_COLUMN_NAME, "VARCHAR(30)", ("PRIMARY KEY",)),
            *_names(30),
            Column("FROM_DATE", "DATE", ("NOT NULL",)),
            Column("TO_DATE", "DATE", ("NOT NULL",)),
        ),
    )
    return SchemaCatalog(
        (brands, groups, subgroups, subgroups1, units, items, year_source)
    )
