"""CSV export functionality."""

import csv
import io

from cryptotrack.domain.views import PortfolioSnapshot


PORTFOLIO_CSV_COLUMNS = [
    "Coin Name",
    "Symbol",
    "Amount",
    "Buy Price",
    "Current Price",
    "Investment",
    "Current Value",
    "Profit/Loss",
    "P&L %",
    "Purchase Date",
]

TOTAL_LABEL = "TOTAL"


def portfolio_to_csv(snapshot: PortfolioSnapshot) -> str:
    """
    Serialize a valued portfolio to a CSV string.

    One row per holding in snapshot order, then a TOTAL row carrying the
    aggregate investment, value and P/L.
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=PORTFOLIO_CSV_COLUMNS)
    writer.writeheader()

    for valued in snapshot.holdings:
        h = valued.holding
        writer.writerow({
            "Coin Name": h.coin_name,
            "Symbol": h.symbol,
            "Amount": h.amount,
            "Buy Price": h.buy_price,
            "Current Price": valued.current_price,
            "Investment": valued.investment,
            "Current Value": valued.current_value,
            "Profit/Loss": valued.profit_loss,
            "P&L %": valued.profit_loss_percentage,
            "Purchase Date": h.purchase_date.date().isoformat() if h.purchase_date else "",
        })

    totals = snapshot.totals
    writer.writerow({
        "Coin Name": TOTAL_LABEL,
        "Investment": totals.total_investment,
        "Current Value": totals.total_current_value,
        "Profit/Loss": totals.total_profit_loss,
        "P&L %": totals.total_profit_loss_percentage,
    })
    return output.getvalue()
