from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from autodash.config.model import InferenceSettings
from autodash.core.schema import ColumnType, Schema, infer_schema
from autodash.core.values import normalise_cell


class Dataset:
    """
    The loaded table: ordered column names, immutable rows and the inferred schema.

    Includes:
    - Read-only rows (row order is the source file order)
    - A schema with exactly one entry per column
    - Conversion to a pandas DataFrame for previews and downloads
    """

    def __init__(
        self,
        name: str,
        columns: Sequence[str],
        rows: Iterable[Mapping[str, Any]],
        schema: Mapping[str, ColumnType],
    ) -> None:
        self.name = name
        self.columns: Tuple[str, ...] = tuple(columns)
        self.rows: Tuple[Mapping[str, Any], ...] = tuple(
            MappingProxyType(dict(row)) for row in rows
        )

        missing = [c for c in self.columns if c not in schema]
        extra = [c for c in schema if c not in self.columns]
        if missing or extra:
            raise ValueError(
                f"Schema does not match columns for dataset '{name}': "
                f"missing={missing}, unexpected={extra}"
            )
        # Re-key in column order
        self.schema: Schema = {c: ColumnType(schema[c]) for c in self.columns}

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    @classmethod
    def from_rows(
        cls,
        name: str,
        rows: Iterable[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
        schema: Optional[Mapping[str, ColumnType]] = None,
        settings: Optional[InferenceSettings] = None,
    ) -> Dataset:
        """
        Normalise raw decoder rows and build a Dataset.

        - columns default to first-seen order across all rows
        - schema is inferred when not given
        """
        normalised: List[Dict[str, Any]] = [
            {str(k): normalise_cell(v) for k, v in row.items()} for row in rows
        ]

        if columns is None:
            seen: Dict[str, None] = {}
            for row in normalised:
                for key in row:
                    seen.setdefault(key, None)
            columns = list(seen)
        else:
            columns = [str(c) for c in columns]

        if schema is None:
            schema = infer_schema(normalised, columns, settings)

        return cls(name=name, columns=columns, rows=normalised, schema=schema)

    # -------------------------------------------------------------------------
    # Properties & getters
    # -------------------------------------------------------------------------
    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_columns(self) -> int:
        return len(self.columns)

    def columns_of_type(self, kind: ColumnType) -> List[str]:
        return [c for c, t in self.schema.items() if t is kind]

    def to_frame(self, rows: Optional[Sequence[Mapping[str, Any]]] = None) -> pd.DataFrame:
        """Rows (all, or the given subset) as a DataFrame with columns in dataset order."""
        source = self.rows if rows is None else rows
        return pd.DataFrame([dict(r) for r in source], columns=list(self.columns))

    def __repr__(self) -> str:
        return f"Dataset(name={self.name!r}, rows={self.n_rows}, columns={self.n_columns})"
