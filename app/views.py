from typing import Iterable

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from core.domain import EXPENSE, NO_EXPENSES_LABEL, Aggregates, Transaction
from core.services import Toast

# tailwind palette
COLORS = ["#34d399", "#10b981", "#f87171", "#60a5fa", "#fbbf24", "#a78bfa"]
PLACEHOLDER_COLOR = "#4b5563"

FRAME_COLUMNS = ["date", "kind", "category", "description", "amount", "signed", "method", "note"]


def format_money(value: float) -> str:
    """Format like es-AR currency: "$ 1.234,56"."""
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-$ {text}" if value < 0 else f"$ {text}"


def signed_label(t: Transaction) -> str:
    sign = "-" if t.kind == EXPENSE else "+"
    return f"{sign}{format_money(t.amount)}"


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": pd.to_datetime(t.date),
            "kind": t.kind,
            "category": t.category,
            "description": t.description,
            "amount": t.amount,
            "signed": t.signed_amount,
            "method": t.method,
            "note": t.note,
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def category_figure(aggregates: Aggregates) -> go.Figure:
    df = pd.DataFrame(
        list(aggregates.category_breakdown.items()), columns=["Category", "Total"]
    )
    colors = COLORS if aggregates.has_expenses else [PLACEHOLDER_COLOR]
    fig = px.pie(
        df,
        values="Total",
        names="Category",
        color_discrete_sequence=colors,
        template="plotly_dark",
    )
    if aggregates.has_expenses:
        fig.update_traces(textinfo="label+percent")
    else:
        # Placeholder slice carries no amount worth showing
        fig.update_traces(textinfo="label", hoverinfo="label")
    fig.update_layout(height=320, margin=dict(t=10, b=10, l=10, r=10), showlegend=aggregates.has_expenses)
    return fig


def is_placeholder_chart(aggregates: Aggregates) -> bool:
    return not aggregates.has_expenses and list(aggregates.category_breakdown) == [NO_EXPENSES_LABEL]


def toast_duration(toast: Toast) -> int:
    """Whole seconds for st.toast, never below one."""
    return max(1, int(round(toast.seconds)))


def toast_icon(toast: Toast) -> str:
    return "✅" if toast.tone == "ok" else "❌"
