"""Reporting helpers for computed valuations."""

from .export import RANKING_HEADERS, RankingExportError, export_rankings_to_csv

__all__ = ["RANKING_HEADERS", "RankingExportError", "export_rankings_to_csv"]
