from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from habit_dashboard.constants import COLOR_SWATCHES
from habit_dashboard.dates import format_date_short, last_n_days


def apply_common_plot_style(fig, title, show_ygrid=True):
    fig.update_layout(
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=40, r=20, t=40, b=30),
        height=240,
        xaxis=dict(showgrid=False, zeroline=False),
        yaxis=dict(showgrid=show_ygrid, zeroline=False),
    )
    return fig


def build_history_frame(habit, entries, days, today=None):
    by_date = {str(entry.get("date")): entry for entry in entries or []}
    rows = []
    for day in last_n_days(days, today=today):
        entry = by_date.get(day.isoformat(), {})
        if habit.get("type") == "unit":
            score = float(entry.get("value") or 0)
        else:
            score = 1.0 if entry.get("status") else 0.0
        rows.append(
            {
                "date": day,
                "label": format_date_short(day),
                "score": score,
                "logged": bool(entry),
            }
        )
    return pd.DataFrame(rows, columns=["date", "label", "score", "logged"])


def build_history_figure(habit, frame):
    color = COLOR_SWATCHES.get(habit.get("color"), COLOR_SWATCHES["blue"])
    fig = go.Figure(
        go.Bar(
            x=frame["label"],
            y=frame["score"],
            marker_color=[color if logged else "#D1D5DB" for logged in frame["logged"]],
        )
    )
    if habit.get("type") == "unit" and habit.get("target_value"):
        fig.add_hline(y=float(habit["target_value"]), line_dash="dot", line_color=color)
        title = f"{habit['name']} • last {len(frame)} days"
    else:
        fig.update_yaxes(range=[0, 1], tickvals=[0, 1], ticktext=["No", "Yes"])
        title = f"{habit['name']} • done in {int(frame['score'].sum())}/{len(frame)} days"
    return apply_common_plot_style(fig, title)
