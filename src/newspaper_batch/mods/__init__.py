"""MODS records for issues and pages."""

from newspaper_batch.mods.builder import MODS_NAMESPACE, build_issue_mods, build_page_mods, write_mods

__all__ = [
    "MODS_NAMESPACE",
    "build_issue_mods",
    "build_page_mods",
    "write_mods",
]
