"""
Core domain layer: value classifier, schema inference, column statistics,
filter state + row filtering, chart aggregation, the view base class and
the view registry.

Import from the submodules (autodash.core.schema, autodash.core.filtering, ...);
config models depend on autodash.core.exceptions, so this package stays import-light.
"""
