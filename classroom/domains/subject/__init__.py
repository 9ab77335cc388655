# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject domain package."""

from classroom.domains.subject.service import SubjectService

__all__ = ["SubjectService"]
