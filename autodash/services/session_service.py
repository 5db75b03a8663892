from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional

from autodash.config.model import AppSettings
from autodash.core.charts import ChartConfig, aggregate, build_chart_configs
from autodash.core.dataset import Dataset
from autodash.core.exceptions import UploadInProgressError
from autodash.core.filter_state import FilterState, NumericRange
from autodash.core.filtering import filter_rows
from autodash.core.statistics import FilterOptions, build_filter_options
from autodash.importing.demo_templates import get_template
from autodash.importing.file_loader import parse_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    n_rows: int
    n_columns: int
    n_charts: int


class DataSession:
    """
    The single working set of one user: the current Dataset plus the FilterState applied to it.

    - Loading a dataset (upload or demo template) replaces the previous one wholesale
      and resets the filters to the neutral state.
    - A failed upload leaves the current dataset untouched.
    - Only one upload may be in flight; a second one raises UploadInProgressError.

    Readers get consistent snapshots: dataset and filters are swapped under one lock.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()
        self._lock = threading.RLock()
        self._dataset: Optional[Dataset] = None
        self._filters = FilterState()
        self._filter_options: Optional[FilterOptions] = None
        self._processing = False
        self.file_name: Optional[str] = None

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------
    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def processing(self) -> bool:
        return self._processing

    # -------------------------------------------------------------------------
    # Dataset lifecycle
    # -------------------------------------------------------------------------
    def load_dataset(self, dataset: Dataset, file_name: Optional[str] = None) -> Dataset:
        with self._lock:
            self._dataset = dataset
            self._filters = FilterState()
            self._filter_options = None
            self.file_name = file_name

        logger.info(
            "Dataset loaded",
            extra={
                "dataset": dataset.name,
                "n_rows": dataset.n_rows,
                "n_columns": dataset.n_columns,
            },
        )
        return dataset

    def clear(self) -> None:
        """Forget the current dataset. An upload still being parsed is not interrupted."""
        with self._lock:
            self._dataset = None
            self._filters = FilterState()
            self._filter_options = None
            self.file_name = None

    def begin_upload(self, file_name: str) -> None:
        with self._lock:
            if self._processing:
                raise UploadInProgressError(
                    "A file is already being processed. Please wait for it to finish."
                )
            self._processing = True
        logger.info("Upload started", extra={"file_name": file_name})

    def finish_upload(self) -> None:
        with self._lock:
            self._processing = False

    def process_upload(self, file_name: str, content: bytes) -> Dataset:
        """
        Decode an uploaded file and make it the current dataset.

        :raises UploadInProgressError: another upload has not finished yet
        :raises UnsupportedFormatError, FileParseError: decoding failed; the previous
            dataset stays current and the file name is cleared
        """
        self.begin_upload(file_name)
        try:
            dataset = parse_file(
                file_name,
                content,
                settings=self.settings.inference,
                max_bytes=self.settings.max_upload_bytes,
            )
        except Exception:
            with self._lock:
                self.file_name = None
            logger.warning("Upload failed", extra={"file_name": file_name}, exc_info=True)
            raise
        else:
            return self.load_dataset(dataset, file_name=file_name)
        finally:
            self.finish_upload()

    def load_template(self, template_id: str) -> Dataset:
        template = get_template(template_id)
        return self.load_dataset(template.to_dataset())

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------
    def set_filters(self, state: FilterState) -> FilterState:
        with self._lock:
            self._filters = state
        return state

    def reset_filters(self) -> FilterState:
        return self.set_filters(FilterState())

    def update_category_filter(self, column: str, values: List[str]) -> FilterState:
        with self._lock:
            return self.set_filters(self._filters.with_category(column, values))

    def update_numeric_filter(self, column: str, rng: Optional[NumericRange]) -> FilterState:
        with self._lock:
            return self.set_filters(self._filters.with_numeric_range(column, rng))

    def update_date_range(self, start: Optional[datetime], end: Optional[datetime]) -> FilterState:
        with self._lock:
            return self.set_filters(self._filters.with_date_range(start, end))

    # -------------------------------------------------------------------------
    # Derived data
    # -------------------------------------------------------------------------
    def filter_options(self) -> FilterOptions:
        """Filter controls for the current dataset; computed once per dataset."""
        with self._lock:
            dataset = self._dataset
            if dataset is None:
                return FilterOptions()
            if self._filter_options is None:
                self._filter_options = build_filter_options(
                    dataset.rows,
                    dataset.schema,
                    max_values=self.settings.charts.max_filter_values,
                )
            return self._filter_options

    def filtered_rows(self) -> List[Mapping[str, Any]]:
        with self._lock:
            dataset, state = self._dataset, self._filters
        if dataset is None:
            return []
        return filter_rows(dataset.rows, state, dataset.schema)

    def chart_configs(self) -> List[ChartConfig]:
        dataset = self._dataset
        if dataset is None:
            return []
        return build_chart_configs(dataset.schema, max_charts=self.settings.charts.max_charts)

    def chart_series(self, config: ChartConfig) -> List[Dict[str, Any]]:
        return aggregate(config, self.filtered_rows(), self.settings.charts)

    def summary(self) -> DashboardSummary:
        dataset = self._dataset
        if dataset is None:
            return DashboardSummary(n_rows=0, n_columns=0, n_charts=0)
        return DashboardSummary(
            n_rows=len(self.filtered_rows()),
            n_columns=dataset.n_columns,
            n_charts=len(self.chart_configs()),
        )


class SessionRegistry(Mapping[str, DataSession]):
    """
    In-memory map of browser session id -> DataSession. Sessions are created on first access.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()
        self._sessions: Dict[str, DataSession] = {}
        self._lock = threading.Lock()

    def __getitem__(self, session_id: str) -> DataSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = DataSession(self.settings)
                self._sessions[session_id] = session
                logger.info("Session created", extra={"session_id": session_id})
            return session

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
