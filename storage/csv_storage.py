"""
CSV Export Storage

Writes tracker data to CSV files with pandas:
- export_applications: one row per application, with its status bucket
- export_history: one row per applied planned job, grouped by day
- save_data / load_data: generic DataFrame persistence used by both

Filenames follow <base>[_<file_id>][_YYYYMMDD_HHMM].csv under the exports dir.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from models.application_models import ApplicationRecord
from models.metrics_models import ApplicationHistory
from utils.status_utils import classify_status

APPLICATION_COLUMNS = [
    "id", "company_name", "job_title", "job_location", "job_type",
    "application_status", "bucket", "application_date", "date_heard_back",
    "is_public", "shared_with",
]
HISTORY_COLUMNS = ["day", "company_name", "job_title", "priority", "applied_date"]


class CSVStorage:
    def __init__(self, settings: dict):
        """
        Args:
            settings (dict): Uses settings['storage']['exports_path'], falling
                back to <system.data_dir>/exports.
        """
        storage_settings = settings.get('storage', {})
        data_dir = settings.get('system', {}).get('data_dir', './data')
        self.data_dir = Path(storage_settings.get('exports_path') or Path(data_dir) / 'exports')
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _file_path(self, base_filename: str, file_id: Optional[str], use_timestamp: bool) -> Path:
        filename_parts = [base_filename]
        if file_id:
            filename_parts.append(file_id)
        if use_timestamp:
            filename_parts.append(datetime.now().strftime("%Y%m%d_%H%M"))
        return self.data_dir / ("_".join(filename_parts) + ".csv")

    def save_data(
        self,
        data: Union[pd.DataFrame, List[dict]],
        base_filename: str,
        append: bool = False,
        use_timestamp: bool = False,
        file_id: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> Path:
        """
        Save rows to a CSV file, overwriting by default.

        Args:
            data: A pandas DataFrame or a list of row dictionaries.
            base_filename: Base name for the CSV file (e.g. "applications").
            append: Append rows instead of overwriting; the header is only
                written when the file does not exist yet.
            use_timestamp: Add a YYYYMMDD_HHMM suffix to the filename.
            file_id: Optional discriminator appended to the filename.
            columns: Column order to enforce (also used for empty exports).

        Returns:
            Path of the written file.
        """
        df = pd.DataFrame(data, columns=columns) if isinstance(data, list) else data
        file_path = self._file_path(base_filename, file_id, use_timestamp)

        mode = 'a' if append else 'w'
        header = not (append and file_path.exists())
        df.to_csv(file_path, mode=mode, header=header, index=False)
        return file_path

    def load_data(self, base_filename: str, file_id: Optional[str] = None) -> pd.DataFrame:
        """Load an export back; a missing file gives an empty DataFrame."""
        file_path = self._file_path(base_filename, file_id, use_timestamp=False)
        if not file_path.exists():
            return pd.DataFrame()
        return pd.read_csv(file_path)

    def export_applications(
        self,
        records: Iterable[ApplicationRecord],
        file_id: Optional[str] = None,
        use_timestamp: bool = False,
    ) -> Path:
        rows = []
        for record in records:
            rows.append({
                "id": record.id,
                "company_name": record.company_name,
                "job_title": record.job_title,
                "job_location": record.job_location or "",
                "job_type": record.job_type or "",
                "application_status": record.application_status,
                "bucket": classify_status(record.application_status),
                "application_date": record.application_date.isoformat() if record.application_date else "",
                "date_heard_back": record.date_heard_back.isoformat() if record.date_heard_back else "",
                "is_public": record.is_public,
                "shared_with": ", ".join(sorted(record.shared_ids)),
            })
        return self.save_data(rows, "applications", file_id=file_id,
                              use_timestamp=use_timestamp, columns=APPLICATION_COLUMNS)

    def export_history(
        self,
        history: ApplicationHistory,
        file_id: Optional[str] = None,
        use_timestamp: bool = False,
    ) -> Path:
        rows = []
        for day in history.days:
            for record in day.records:
                rows.append({
                    "day": day.day.isoformat(),
                    "company_name": record.company_name,
                    "job_title": record.job_title,
                    "priority": record.priority or "",
                    "applied_date": record.applied_date.isoformat() if record.applied_date else "",
                })
        return self.save_data(rows, "history", file_id=file_id,
                              use_timestamp=use_timestamp, columns=HISTORY_COLUMNS)
