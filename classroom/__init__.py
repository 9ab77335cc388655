"""Classroom API Backend.

REST backend for classroom management: users, departments, subjects,
classes and enrollments on a relational store.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
