"""CSV export of portfolio data."""

from cryptotrack.csv.exporter import PORTFOLIO_CSV_COLUMNS, TOTAL_LABEL, portfolio_to_csv

__all__ = ["PORTFOLIO_CSV_COLUMNS", "TOTAL_LABEL", "portfolio_to_csv"]
