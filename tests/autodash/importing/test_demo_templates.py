from __future__ import annotations

import pytest

from autodash.core.exceptions import UnknownTemplateError
from autodash.core.schema import ColumnType
from autodash.importing.demo_templates import get_template, list_templates


def test_templates_are_listed_in_order():
    assert [t.id for t in list_templates()] == ["sales", "marketing", "finance", "hr"]


@pytest.mark.parametrize("template_id", ["sales", "marketing", "finance", "hr"])
def test_template_builds_dataset_with_declared_schema(template_id):
    template = get_template(template_id)
    ds = template.to_dataset()

    assert ds.name == template.name
    assert ds.schema == template.schema
    assert ds.n_rows > 0
    assert set(ds.rows[0]) == set(template.schema)
    assert ds.columns_of_type(ColumnType.DATE)


def test_template_rows_are_reproducible():
    template = get_template("sales")
    first = [dict(r) for r in template.to_dataset().rows]
    second = [dict(r) for r in template.to_dataset().rows]
    assert first == second


def test_unknown_template():
    with pytest.raises(UnknownTemplateError, match="nope"):
        get_template("nope")
