# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Clients for the external services the pipeline calls.

- image_search: Wikimedia Commons image lookup (httpx)
- speech: Google Cloud Text-to-Speech (aiohttp)
"""
