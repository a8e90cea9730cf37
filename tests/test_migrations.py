from io import StringIO

import pytest
from django.core.management import call_command
from django.db import connection
from django.db.migrations.recorder import MigrationRecorder

pytestmark = pytest.mark.django_db

LOCAL_APPS = [
    'services', 'barbers', 'clients', 'packages',
    'subscriptions', 'appointments', 'notifications',
]


def test_models_have_no_missing_migrations():
    out = StringIO()

    call_command('makemigrations', '--check', '--dry-run', stdout=out)

    assert 'No changes detected' in out.getvalue()


def test_initial_migrations_applied_for_every_app():
    applied = set(
        MigrationRecorder(connection).migration_qs.values_list('app', 'name')
    )

    for app_label in LOCAL_APPS:
        assert (app_label, '0001_initial') in applied
