"""Adaptive Tutor Backend.

Adaptive-learning content pipeline behind the AI tutor classroom: learner
profile adaptation, language-model tutoring content, visual enrichment and
accessibility-tuned speech.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
