import pytest

from buildprep.core.errors import CatalogError
from buildprep.core.schema import (
    Column,
    ForeignKey,
    SchemaCatalog,
    TableDefinition,
    default_catalog,
    select_tables,
)


def _table(name: str, *refs: str) -> TableDefinition:
    columns = [Column("CODE", "INT", ("PRIMARY KEY",))]
    columns += [Column(f"{ref}_CODE", "INT") for ref in refs]
    return TableDefinition(
        name,
        tuple(columns),
        tuple(ForeignKey(f"{ref}_CODE", ref) for ref in refs),
    )


def test_default_catalog_has_seven_tables_in_creation_order():
    catalog = default_catalog()

    assert catalog.names == [
        "ITEM_BRANDS",
        "ITEM_GROUPS",
        "ITEM_SUBGROUPS",
        "ITEM_SUBGROUPS1",
        "UNITS",
        "ITEMS",
        "YEAR_SOURCE",
    ]


def test_default_catalog_creation_order_respects_foreign_keys():
    seen: set[str] = set()
    for table in default_catalog().creation_order():
        assert set(table.dependencies) <= seen
        seen.add(table.name)


def test_script_names_are_lowercase_and_hyphenated():
    names = [t.script_name for t in default_catalog()]

    assert names == [
        "item-brands.sql",
        "item-groups.sql",
        "item-subgroups.sql",
        "item-subgroups1.sql",
        "units.sql",
        "items.sql",
        "year-source.sql",
    ]


def test_create_statement_renders_columns_and_foreign_keys():
    subgroups = default_catalog().get("item_subgroups")

    assert subgroups.create_statement() == (
        "CREATE TABLE ITEM_SUBGROUPS("
        "CODE INT PRIMARY KEY AUTO_INCREMENT, "
        "ANAME VARCHAR(60) NOT NULL, "
        "ENAME VARCHAR(60), "
        "GROUP_CODE INT NOT NULL, "
        "FOREIGN KEY(GROUP_CODE) REFERENCES ITEM_GROUPS(CODE));"
    )


def test_items_references_units_three_times_but_depends_once():
    items = default_catalog().get("ITEMS")

    assert len(items.foreign_keys) == 7
    assert items.dependencies.count("UNITS") == 1
    assert "AVAILABLE_QTY INT DEFAULT 0" in items.create_statement()


def test_drop_script_has_one_clause_per_table_dependents_first():
    catalog = default_catalog()
    script = catalog.drop_script()

    assert "\n" not in script
    assert script.count("DROP TABLE IF EXISTS") == len(catalog)
    for name in catalog.names:
        assert f"DROP TABLE IF EXISTS {name};" in script
    assert script.index("ITEMS;") < script.index("UNITS;")


def test_catalog_rejects_duplicate_names():
    with pytest.raises(CatalogError, match="Duplicate"):
        SchemaCatalog((_table("A"), _table("a")))


def test_catalog_rejects_forward_references():
    with pytest.raises(CatalogError, match="not declared before"):
        SchemaCatalog((_table("CHILD", "PARENT"), _table("PARENT")))


def test_catalog_rejects_unknown_foreign_key_column():
    table = TableDefinition(
        "CHILD",
        (Column("CODE", "INT"),),
        (ForeignKey("MISSING", "PARENT"),),
    )
    with pytest.raises(CatalogError, match="MISSING"):
        SchemaCatalog((_table("PARENT"), table))


def test_catalog_get_unknown_table():
    with pytest.raises(KeyError, match="NOPE"):
        default_catalog().get("NOPE")


def test_catalog_membership_ignores_case():
    catalog = default_catalog()

    assert "units" in catalog
    assert "ITEMS" in catalog
    assert "ghost" not in catalog
    assert 7 not in catalog


def test_select_tables_pulls_in_dependencies_in_catalog_order():
    sub = select_tables(default_catalog(), ["item_subgroups1"])

    assert sub.names == ["ITEM_GROUPS", "ITEM_SUBGROUPS", "ITEM_SUBGROUPS1"]


def test_select_tables_unknown_name():
    with pytest.raises(KeyError):
        select_tables(default_catalog(), ["ghost"])
