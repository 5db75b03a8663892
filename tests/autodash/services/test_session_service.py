from __future__ import annotations

from datetime import datetime

import pytest

from autodash.config.model import AppSettings, ChartLimits
from autodash.core.exceptions import (
    UnknownTemplateError,
    UnsupportedFormatError,
    UploadInProgressError,
)
from autodash.core.filter_state import FilterState, NumericRange
from autodash.services.session_service import DataSession, SessionRegistry

CITY_CSV = b"city,pop\nNYC,100\nLA,200\nNYC,150\n"


def _loaded_session() -> DataSession:
    session = DataSession()
    session.process_upload("cities.csv", CITY_CSV)
    return session


def test_new_session_is_empty():
    session = DataSession()
    assert session.dataset is None
    assert session.filtered_rows() == []
    assert session.chart_configs() == []
    assert session.summary().n_rows == 0
    assert session.filter_options().categories == {}


def test_process_upload_replaces_dataset_and_resets_filters():
    session = _loaded_session()
    session.update_category_filter("city", ["NYC"])

    session.process_upload("cities2.csv", b"city,pop\nSF,1\nLA,2\n")

    assert session.dataset.name == "cities2.csv"
    assert session.file_name == "cities2.csv"
    assert session.filters == FilterState()
    assert not session.processing


def test_failed_upload_keeps_previous_dataset():
    session = _loaded_session()
    before = session.dataset

    with pytest.raises(UnsupportedFormatError):
        session.process_upload("notes.txt", b"hello")

    assert session.dataset is before
    assert session.file_name is None
    assert not session.processing


def test_second_upload_while_processing_is_rejected():
    session = _loaded_session()
    session.begin_upload("slow.csv")

    with pytest.raises(UploadInProgressError):
        session.process_upload("other.csv", CITY_CSV)

    # The pending upload still owns the session
    assert session.processing
    assert session.file_name == "cities.csv"
    assert session.dataset.name == "cities.csv"

    session.finish_upload()
    assert not session.processing


def test_file_name_changes_only_once_the_upload_parses():
    session = _loaded_session()

    session.begin_upload("pending.csv")
    assert session.file_name == "cities.csv"
    session.finish_upload()

    with pytest.raises(UnsupportedFormatError):
        session.process_upload("notes.txt", b"hello")
    assert session.file_name is None


def test_filters_drive_rows_and_summary():
    session = _loaded_session()

    session.update_category_filter("city", ["NYC"])
    assert [r["pop"] for r in session.filtered_rows()] == [100, 150]

    session.update_numeric_filter("pop", NumericRange(min=120, max=300))
    assert [r["pop"] for r in session.filtered_rows()] == [150]

    summary = session.summary()
    assert summary.n_rows == 1
    assert summary.n_columns == 2
    # city -> bar + pie, pop -> line
    assert summary.n_charts == 3

    session.reset_filters()
    assert len(session.filtered_rows()) == 3


def test_chart_series_uses_filtered_rows():
    session = _loaded_session()
    bar = session.chart_configs()[0]

    assert session.chart_series(bar) == [{"name": "NYC", "count": 2}, {"name": "LA", "count": 1}]

    session.update_numeric_filter("pop", NumericRange(min=120, max=300))
    assert session.chart_series(bar) == [{"name": "LA", "count": 1}, {"name": "NYC", "count": 1}]


def test_filter_options_are_cached_per_dataset():
    session = _loaded_session()
    first = session.filter_options()
    assert session.filter_options() is first
    assert first.categories == {"city": ["LA", "NYC"]}

    session.load_template("sales")
    assert session.filter_options() is not first


def test_load_template_and_clear():
    session = DataSession()
    ds = session.load_template("hr")

    assert session.dataset is ds
    assert session.filter_options().has_date_filter

    session.update_date_range(datetime(2024, 1, 1), None)
    assert session.filters.date_range.is_active

    session.clear()
    assert session.dataset is None
    assert session.filters == FilterState()

    with pytest.raises(UnknownTemplateError):
        session.load_template("missing")


def test_chart_limits_come_from_settings():
    settings = AppSettings(charts=ChartLimits(max_charts=1))
    session = DataSession(settings)
    session.process_upload("cities.csv", CITY_CSV)
    assert len(session.chart_configs()) == 1


def test_session_registry_creates_sessions_on_demand():
    registry = SessionRegistry()
    assert "abc" not in registry

    session = registry["abc"]
    assert registry["abc"] is session
    assert "abc" in registry
    assert len(registry) == 1
    assert list(registry) == ["abc"]

    registry.drop("abc")
    assert len(registry) == 0
