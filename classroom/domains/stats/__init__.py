# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard statistics domain package."""

from classroom.domains.stats.service import StatsService

__all__ = ["StatsService"]
