# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

Loads the bundled sample dataset (users, credential accounts, departments,
subjects, classes and enrollments) and reconciles it into the database.

Run with:
    python -m classroom.infrastructure.database.seeds --create-schema
"""

from classroom.infrastructure.database.seeds.reconciler import (
    PasswordHasher,
    SeedData,
    SeedPhase,
    SeedReconciler,
    SeedReferenceError,
    default_phases,
    load_seed_data,
)

__all__ = [
    "PasswordHasher",
    "SeedData",
    "SeedPhase",
    "SeedReconciler",
    "SeedReferenceError",
    "default_phases",
    "load_seed_data",
]
