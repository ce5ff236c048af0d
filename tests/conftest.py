"""
Pytest Configuration and Shared Fixtures

This module provides the test configuration and shared fixtures for the Job
Application Tracker.

Key Components:
--------------
1. Path Configuration:
   - Sets up project root path
   - Configures Python path for imports

2. Test Data:
   - A fixed "today" so calendar logic is deterministic
   - Factories for application and planned records
   - A seeded in-memory record store

Fixtures:
---------
- mock_settings: Application settings rooted in a temporary directory
- today / now: Fixed reference date and time
- make_record: ApplicationRecord factory
- make_planned: PlannedApplicationRecord factory
- store: InMemoryRecordStore seeded with two users' data

Notes:
------
- Uses pytest-asyncio for async test support
"""

import sys
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

# Add the project root directory to Python path (using pathlib)
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from models.application_models import ApplicationRecord, SharedUser  # noqa: E402
from models.planning_models import PlannedApplicationRecord, PlannedStatus, UserSettings  # noqa: E402
from models.user_models import UserProfile  # noqa: E402
from storage.memory_store import InMemoryRecordStore  # noqa: E402

# Add pytest-asyncio configuration
pytest_plugins = ["pytest_asyncio"]

TODAY = date(2024, 3, 15)


@pytest.fixture
def mock_settings(tmp_path):
    """Provide application settings shaped like config.settings.load_settings()."""
    data_dir = tmp_path / 'data'
    return {
        'system': {
            'data_dir': str(data_dir),
            'log_level': 'DEBUG',
            'debug_mode': False,
        },
        'storage': {
            'records_path': str(data_dir / 'records'),
            'exports_path': str(data_dir / 'exports'),
        },
        'planning': {
            'default_daily_goal': 5,
            'max_daily_goal': 10,
        },
        'analytics': {
            'default_timeframe': '30days',
            'top_companies_limit': 5,
            'recent_limit': 5,
        },
        'identity': {
            'user_id': 'alice',
            'display_name': 'Alice',
            'email': 'alice@example.com',
        },
    }


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return datetime.combine(TODAY, datetime.min.time()).replace(hour=12)


@pytest.fixture
def make_record():
    def _make(owner_id='alice', status='Applied', company='Acme', title='Engineer', **kwargs):
        return ApplicationRecord(
            owner_id=owner_id,
            company_name=company,
            job_title=title,
            application_status=status,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_planned():
    def _make(owner_id='alice', company='Acme', title='Engineer', **kwargs):
        return PlannedApplicationRecord(
            owner_id=owner_id,
            company_name=company,
            job_title=title,
            **kwargs,
        )
    return _make


@pytest.fixture
def store(make_record, make_planned, now):
    """
    Two users:
    - alice: four applications (one public, one shared with bob), planned jobs
      overdue/undated/today/applied, a goal of 3 and a private profile
    - bob: two public applications and a profile sharing his stats
    """
    bob = SharedUser(id='bob', email='bob@example.com', display_name='Bob')
    records = [
        make_record(id='a1', company='Acme', status='Applied',
                    application_date=now - timedelta(days=2)),
        make_record(id='a2', company='Globex', status='Interview',
                    application_date=now - timedelta(days=10),
                    date_heard_back=now - timedelta(days=5), is_public=True),
        make_record(id='a3', company='Initech', status='Offer',
                    application_date=now - timedelta(days=40),
                    date_heard_back=now - timedelta(days=31), shared_with=[bob]),
        make_record(id='a4', company='Umbrella', status='Rejected',
                    application_date=now - timedelta(days=5)),
        make_record(id='b1', owner_id='bob', company='Globex', status='Phone Screen',
                    application_date=now - timedelta(days=3), is_public=True),
        make_record(id='b2', owner_id='bob', company='Hooli', status='Applied',
                    application_date=now - timedelta(days=1), is_public=True),
    ]
    planned = [
        make_planned(id='p1', company='Overdue Co', priority='Low',
                     planned_date=now - timedelta(days=3)),
        make_planned(id='p2', company='Undated Co', priority='High'),
        make_planned(id='p3', company='Today Co', planned_date=now),
        make_planned(id='p4', company='Done Co', planned_date=now,
                     status=PlannedStatus.APPLIED, applied_date=now),
    ]
    settings = [UserSettings(owner_id='alice', daily_application_goal=3)]
    profiles = [
        UserProfile(user_id='alice', display_name='Alice', share_stats=False),
        UserProfile(user_id='bob', display_name='Bob', share_stats=True),
    ]
    return InMemoryRecordStore(records, planned, settings, profiles)
