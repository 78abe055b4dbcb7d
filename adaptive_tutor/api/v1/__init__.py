# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    ai: Learning content pipeline and image preview endpoints.
"""

from fastapi import APIRouter

from adaptive_tutor.api.v1 import ai

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(ai.router, prefix="/ai", tags=["AI Tutor"])

__all__ = ["router"]
