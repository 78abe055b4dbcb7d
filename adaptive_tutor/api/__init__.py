# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Adaptive Tutor HTTP API."""

from adaptive_tutor.api.app import create_app

__all__ = ["create_app"]
