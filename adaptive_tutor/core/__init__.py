# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for Adaptive Tutor.

This package contains shared infrastructure for the content pipeline:
- config: Application configuration, settings and static tables
- intelligence: Language-model client
"""
