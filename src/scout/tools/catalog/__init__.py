"""Contract catalog for every operation the environment exposes."""

from __future__ import annotations

from scout.tools.catalog import advanced, development, files, interface, media, web

ALL_CONTRACTS = (
    *files.CONTRACTS,
    *media.CONTRACTS,
    *web.CONTRACTS,
    *development.CONTRACTS,
    *interface.CONTRACTS,
    *advanced.CONTRACTS,
)

__all__ = ["ALL_CONTRACTS"]
