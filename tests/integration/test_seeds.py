# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the seed reconciler against SQLite."""

import bcrypt
import pytest
from sqlalchemy import func, select

from classroom.infrastructure.database.models import (
    Account,
    Class,
    Department,
    Enrollment,
    Subject,
    User,
)
from classroom.infrastructure.database.seeds import (
    PasswordHasher,
    SeedData,
    SeedReconciler,
    SeedReferenceError,
    load_seed_data,
)

pytestmark = pytest.mark.integration


async def _count(database, model) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.fixture
def reconciler(database):
    """Reconciler with a cheap bcrypt cost."""
    return SeedReconciler(database, PasswordHasher(rounds=4))


class TestSeedReconciler:
    """Tests for SeedReconciler.run."""

    @pytest.mark.asyncio
    async def test_seeds_bundled_dataset(self, database, reconciler, settings):
        """Every entity of the dataset is inserted."""
        lookups = await reconciler.run(load_seed_data(settings.seed.data_file))

        assert await _count(database, User) == 8
        assert await _count(database, Account) == 8
        assert await _count(database, Department) == 3
        assert await _count(database, Subject) == 5
        assert await _count(database, Class) == 5
        assert await _count(database, Enrollment) == 6
        assert set(lookups["classes"]) == {"ABC123", "dsa2k5q", "calc7x1", "linalg9", "mech4lb"}

    @pytest.mark.asyncio
    async def test_credential_accounts(self, database, reconciler, settings):
        """Accounts use the credential provider and a bcrypt hash of the password."""
        await reconciler.run(load_seed_data(settings.seed.data_file))

        async with database.session() as session:
            account = await session.scalar(select(Account).where(Account.user_id == "user_student_01"))

        assert account.provider_id == "credential"
        assert account.account_id == "priya.nair@classroom.dev"
        assert bcrypt.checkpw(b"Student#2025", account.password.encode("utf-8"))

    @pytest.mark.asyncio
    async def test_rerun_without_wipe_is_idempotent(self, database, reconciler, settings):
        """Running again over existing rows inserts nothing new and keeps ids."""
        data = load_seed_data(settings.seed.data_file)
        first = await reconciler.run(data)

        second = await reconciler.run(data, wipe=False)

        assert second == first
        assert await _count(database, Enrollment) == 6
        assert await _count(database, Account) == 8

    @pytest.mark.asyncio
    async def test_rerun_with_wipe(self, database, reconciler, settings):
        """A wiping run replaces the rows."""
        data = load_seed_data(settings.seed.data_file)
        await reconciler.run(data)

        await reconciler.run(data)

        assert await _count(database, Class) == 5
        assert await _count(database, User) == 8

    @pytest.mark.asyncio
    async def test_unknown_department_aborts_phase(self, database, reconciler):
        """A subject with an unknown department code inserts no subjects."""
        data = SeedData(
            departments=[{"code": "CS", "name": "Computer Science"}],
            subjects=[
                {"code": "CS101", "name": "Intro", "departmentCode": "CS"},
                {"code": "BIO101", "name": "Biology", "departmentCode": "BIO"},
            ],
        )

        with pytest.raises(SeedReferenceError, match="Missing department for key: BIO"):
            await reconciler.run(data)

        assert await _count(database, Department) == 1
        assert await _count(database, Subject) == 0
