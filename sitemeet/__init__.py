# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Meeting coordination core: permission resolution and meeting closure."""

__version__ = "0.1.0"
