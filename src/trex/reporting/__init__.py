# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers for classified compiler output."""

from __future__ import annotations

from .formatters import RenderConfig, render_category, render_report

__all__ = ["RenderConfig", "render_category", "render_report"]
