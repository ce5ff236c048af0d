"""
Unit Tests for CSV Export Storage

Tests the pandas-backed export of applications and application history.
"""

from datetime import datetime

import pandas as pd
import pytest

from models.application_models import SharedUser
from models.planning_models import PlannedStatus
from storage.csv_storage import APPLICATION_COLUMNS, CSVStorage
from utils.planning_utils import aggregate_history


@pytest.fixture
def csv_storage(mock_settings):
    return CSVStorage(mock_settings)


def test_exports_dir_created(csv_storage, mock_settings):
    assert csv_storage.data_dir.exists()
    assert str(csv_storage.data_dir) == mock_settings['storage']['exports_path']


def test_save_and_load(csv_storage):
    path = csv_storage.save_data([{"a": 1, "b": "x"}], "sample")
    assert path.name == "sample.csv"
    df = csv_storage.load_data("sample")
    assert df.to_dict("records") == [{"a": 1, "b": "x"}]


def test_append_keeps_single_header(csv_storage):
    csv_storage.save_data([{"a": 1}], "sample", append=True)
    csv_storage.save_data([{"a": 2}], "sample", append=True)
    df = csv_storage.load_data("sample")
    assert list(df["a"]) == [1, 2]


def test_timestamped_filename(csv_storage):
    path = csv_storage.save_data(pd.DataFrame([{"a": 1}]), "sample", use_timestamp=True, file_id="alice")
    assert path.name.startswith("sample_alice_")
    assert path.exists()


def test_load_missing_file(csv_storage):
    assert csv_storage.load_data("missing").empty


def test_export_applications(csv_storage, make_record):
    records = [
        make_record(id="a1", status="Phone Screen", application_date=datetime(2024, 1, 2),
                    shared_with=[SharedUser(id="bob"), SharedUser(id="ann")]),
        make_record(id="a2", status="Applied", is_public=True),
    ]
    path = csv_storage.export_applications(records, file_id="alice")
    df = pd.read_csv(path, keep_default_na=False)

    assert list(df.columns) == APPLICATION_COLUMNS
    assert list(df["bucket"]) == ["interview", "pending"]
    assert df.loc[0, "shared_with"] == "ann, bob"
    assert df.loc[0, "application_date"].startswith("2024-01-02")
    assert df.loc[1, "application_date"] == ""


def test_export_empty_applications_writes_header(csv_storage):
    path = csv_storage.export_applications([])
    df = pd.read_csv(path)
    assert df.empty
    assert list(df.columns) == APPLICATION_COLUMNS


def test_export_history(csv_storage, make_planned):
    records = [
        make_planned(company="A", status=PlannedStatus.APPLIED, applied_date=datetime(2024, 1, 2, 9)),
        make_planned(company="B", status=PlannedStatus.APPLIED, applied_date=datetime(2024, 1, 3, 9)),
    ]
    path = csv_storage.export_history(aggregate_history(records))
    df = pd.read_csv(path)
    assert list(df["day"]) == ["2024-01-03", "2024-01-02"]
    assert list(df["company_name"]) == ["B", "A"]
