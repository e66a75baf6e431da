# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Run the API server: ``python -m sitemeet`` or the ``sitemeet`` script."""

import uvicorn

from sitemeet.config import settings


def main() -> None:
    uvicorn.run(
        "sitemeet.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
