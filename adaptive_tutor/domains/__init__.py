# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Business domains of Adaptive Tutor.

- auth: Bearer token validation
- learning: Adaptive learning content pipeline
"""
