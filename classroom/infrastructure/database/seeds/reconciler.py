# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Seed reconciler.

The seed dataset refers to rows by stable natural keys (department code,
subject code, class invite code) while foreign keys point at generated
integer ids. The reconciler therefore runs an ordered list of phases:

    users -> accounts -> departments -> subjects -> classes -> enrollments

Each phase builds all of its rows first, resolving natural keys through
the lookups recorded by earlier phases, and fails with SeedReferenceError
before inserting anything if a key is unknown. It then inserts the rows,
skipping those whose unique target already exists, and re-selects the
rows by natural key to record a natural key -> id lookup for later phases.

Every phase commits in its own session. A failing phase leaves the phases
before it committed.

Example:
    reconciler = SeedReconciler(database, PasswordHasher(rounds=12))
    await reconciler.run(load_seed_data(path))
"""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import bcrypt
from sqlalchemy import delete, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import (
    Account,
    Base,
    Class,
    ClassStatus,
    Department,
    Enrollment,
    Session,
    Subject,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

# Deleting children before parents keeps every foreign key satisfied
WIPE_ORDER: tuple[type[Base], ...] = (
    Enrollment,
    Class,
    Subject,
    Department,
    Session,
    Account,
    User,
)

CREDENTIAL_PROVIDER = "credential"

Lookups = dict[str, dict[str, Any]]


class SeedReferenceError(Exception):
    """Raised when a seed row references a natural key that does not exist.

    Attributes:
        label: Kind of the referenced row, e.g. "department".
        key: The unresolved natural key.
    """

    def __init__(self, label: str, key: str) -> None:
        super().__init__(f"Missing {label} for key: {key}")
        self.label = label
        self.key = key


class PasswordHasher:
    """bcrypt hashing for seeded credential accounts."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("Password cannot be empty")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


@dataclass
class SeedData:
    """Seed dataset as authored, keyed by natural keys."""

    users: list[dict[str, Any]] = field(default_factory=list)
    departments: list[dict[str, Any]] = field(default_factory=list)
    subjects: list[dict[str, Any]] = field(default_factory=list)
    classes: list[dict[str, Any]] = field(default_factory=list)
    enrollments: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SeedData":
        return cls(
            users=list(raw.get("users", [])),
            departments=list(raw.get("departments", [])),
            subjects=list(raw.get("subjects", [])),
            classes=list(raw.get("classes", [])),
            enrollments=list(raw.get("enrollments", [])),
        )


def load_seed_data(path: Path) -> SeedData:
    """Read a seed dataset from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return SeedData.from_dict(json.load(f))


def resolve(lookup: Mapping[str, Any], key: str, label: str) -> Any:
    """Map a natural key to its id.

    Raises:
        SeedReferenceError: If the key was not recorded.
    """
    try:
        return lookup[key]
    except KeyError:
        raise SeedReferenceError(label, key) from None


@dataclass(frozen=True)
class SeedPhase:
    """One step of the seed pipeline.

    Attributes:
        name: Phase name, also the key of its lookup.
        model: Table the rows are inserted into.
        conflict_columns: Unique target deciding whether a row already exists.
        build_rows: Builds insert rows from the dataset and earlier lookups,
            resolving every natural-key reference.
        lookup_column: Natural key column re-selected after insert, if later
            phases reference this one.
        lookup_keys: Natural keys of this phase's rows in the dataset.
    """

    name: str
    model: type[Base]
    conflict_columns: tuple[str, ...]
    build_rows: Callable[[SeedData, Lookups], list[dict[str, Any]]]
    lookup_column: str | None = None
    lookup_keys: Callable[[SeedData], list[str]] | None = None


def _user_rows(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
    return [
        {
            "id": user["id"],
            "name": user["name"],
            "email": user["email"],
            "email_verified": True,
            "image": user.get("image"),
            "role": UserRole(user["role"]),
        }
        for user in data.users
    ]


def _account_rows(hash_password: Callable[[str], str]) -> Callable[[SeedData, Lookups], list[dict[str, Any]]]:
    def build(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
        return [
            {
                "id": f"acc_{user['id']}",
                "user_id": user["id"],
                "account_id": user["email"],
                "provider_id": CREDENTIAL_PROVIDER,
                "password": hash_password(user["password"]),
            }
            for user in data.users
        ]

    return build


def _department_rows(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
    return [
        {
            "code": dept["code"],
            "name": dept["name"],
            "description": dept.get("description"),
        }
        for dept in data.departments
    ]


def _subject_rows(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
    return [
        {
            "code": subject["code"],
            "name": subject["name"],
            "description": subject.get("description"),
            "department_id": resolve(lookups["departments"], subject["departmentCode"], "department"),
        }
        for subject in data.subjects
    ]


def _class_rows(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
    return [
        {
            "name": item["name"],
            "description": item.get("description"),
            "capacity": item.get("capacity", 50),
            "status": ClassStatus(item.get("status", ClassStatus.ACTIVE.value)),
            "invite_code": item["inviteCode"],
            "subject_id": resolve(lookups["subjects"], item["subjectCode"], "subject"),
            "teacher_id": item["teacherId"],
            "banner_url": item.get("bannerUrl"),
            "banner_cld_pub_id": None,
            "schedules": [],
        }
        for item in data.classes
    ]


def _enrollment_rows(data: SeedData, lookups: Lookups) -> list[dict[str, Any]]:
    return [
        {
            "student_id": enrollment["studentId"],
            "class_id": resolve(lookups["classes"], enrollment["classInviteCode"], "class"),
        }
        for enrollment in data.enrollments
    ]


def default_phases(hash_password: Callable[[str], str]) -> tuple[SeedPhase, ...]:
    """The seed pipeline in entity dependency order.

    Args:
        hash_password: Hashes plaintext passwords for credential accounts.

    Returns:
        Ordered phase descriptors.
    """
    return (
        SeedPhase(
            name="users",
            model=User,
            conflict_columns=("id",),
            build_rows=_user_rows,
        ),
        SeedPhase(
            name="accounts",
            model=Account,
            conflict_columns=("provider_id", "account_id"),
            build_rows=_account_rows(hash_password),
        ),
        SeedPhase(
            name="departments",
            model=Department,
            conflict_columns=("code",),
            build_rows=_department_rows,
            lookup_column="code",
            lookup_keys=lambda data: [dept["code"] for dept in data.departments],
        ),
        SeedPhase(
            name="subjects",
            model=Subject,
            conflict_columns=("code",),
            build_rows=_subject_rows,
            lookup_column="code",
            lookup_keys=lambda data: [subject["code"] for subject in data.subjects],
        ),
        SeedPhase(
            name="classes",
            model=Class,
            conflict_columns=("invite_code",),
            build_rows=_class_rows,
            lookup_column="invite_code",
            lookup_keys=lambda data: [item["inviteCode"] for item in data.classes],
        ),
        SeedPhase(
            name="enrollments",
            model=Enrollment,
            conflict_columns=("student_id", "class_id"),
            build_rows=_enrollment_rows,
        ),
    )


class SeedReconciler:
    """Runs the seed phases against a database.

    Attributes:
        db: Database the dataset is written to.
        phases: Ordered phase descriptors.
    """

    def __init__(
        self,
        db: Database,
        password_hasher: PasswordHasher | None = None,
        phases: Sequence[SeedPhase] | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            db: Injected database access.
            password_hasher: Hasher for account passwords.
            phases: Phase list; defaults to default_phases().
        """
        self.db = db
        hasher = password_hasher or PasswordHasher()
        self.phases = tuple(phases) if phases is not None else default_phases(hasher.hash)

    async def wipe(self) -> None:
        """Delete every seeded table's rows, children first."""
        async with self.db.session() as session:
            for model in WIPE_ORDER:
                await session.execute(delete(model))
        logger.info("Wiped %d tables", len(WIPE_ORDER))

    async def run(self, data: SeedData, wipe: bool = True) -> Lookups:
        """Seed the database from a dataset.

        Args:
            data: Seed dataset.
            wipe: Delete existing rows before seeding.

        Returns:
            Natural key -> id lookups recorded by the phases.

        Raises:
            SeedReferenceError: If a row references an unknown natural key.
            DatabaseError: If a statement fails.
        """
        if wipe:
            await self.wipe()

        lookups: Lookups = {}
        for phase in self.phases:
            await self._run_phase(phase, data, lookups)

        logger.info("Seed completed")
        return lookups

    async def _run_phase(self, phase: SeedPhase, data: SeedData, lookups: Lookups) -> None:
        rows = phase.build_rows(data, lookups)

        async with self.db.session() as session:
            await self.db.insert_or_skip(session, phase.model, rows, phase.conflict_columns)

            if phase.lookup_column is not None and phase.lookup_keys is not None:
                lookups[phase.name] = await self._select_lookup(session, phase, data)

        logger.info("Seed phase %s: %d rows", phase.name, len(rows))

    @staticmethod
    async def _select_lookup(session: Any, phase: SeedPhase, data: SeedData) -> dict[str, Any]:
        keys = phase.lookup_keys(data)
        if not keys:
            return {}

        key_column = getattr(phase.model, phase.lookup_column)
        result = await session.execute(
            select(key_column, phase.model.id).where(key_column.in_(keys))
        )
        return {key: row_id for key, row_id in result.all()}
