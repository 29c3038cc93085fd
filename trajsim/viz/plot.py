"""
Trajectory Plot
===============

Renders a long-format table as one faint line per trajectory plus an
emphasized mean trend, optionally split into one panel per level of a
second grouping column (typically ``noise``).
"""

import logging
from typing import Optional

import polars as pl

from trajsim.validation.arguments import InvalidArgument, check_non_negative

logger = logging.getLogger(__name__)

TRACE_COLOR = '#333333'
MEAN_COLOR = 'blue'
MEAN_WIDTH = 3


def _add_panel(fig, panel: pl.DataFrame, x: str, y: str, group: str, alpha: float,
               row: Optional[int] = None, show_mean_legend: bool = True):
    """Trajectory traces and the mean trend of one panel."""
    import plotly.graph_objects as go

    loc = dict(row=row, col=1) if row is not None else {}

    for (gid,), traj in panel.sort(x).group_by([group], maintain_order=True):
        fig.add_trace(go.Scatter(
            x=traj[x].to_list(),
            y=traj[y].to_list(),
            mode='lines',
            line=dict(color=TRACE_COLOR, width=1),
            opacity=alpha,
            name=str(gid),
            showlegend=False,
            hoverinfo='skip',
        ), **loc)

    mean = panel.group_by(x).agg(pl.col(y).mean()).sort(x)
    fig.add_trace(go.Scatter(
        x=mean[x].to_list(),
        y=mean[y].to_list(),
        mode='lines',
        line=dict(color=MEAN_COLOR, width=MEAN_WIDTH),
        name='mean',
        showlegend=show_mean_legend,
    ), **loc)


def plot(
    data: pl.DataFrame,
    x_col: str = 'Time',
    y_col: str = 'value',
    group_col: str = 'variable',
    facet: bool = True,
    facet_col: str = 'noise',
    alpha: float = 0.2,
    show: bool = False,
):
    """
    Visualize a long-format table such as the one built by generate_multi.

    Args:
        data: Long-format DataFrame
        x_col: Column of the x axis (typically time)
        y_col: Column of the y axis (typically measurements)
        group_col: Trajectory id column
        facet: If True, one panel per level of facet_col
        facet_col: Second grouping column for faceting
        alpha: Opacity of the trajectory lines, in [0, 1]
        show: Also display the figure

    Returns:
        plotly Figure

    Example:
        df = generate_multi("ps", noises=[0.5, 1.0, 1.5, 2.0], n=10, freq=0.5, end=30)
        fig = plot(df)
        fig.write_html("ps.html")
    """
    import plotly.graph_objects as go
    from plotly.subplots import make_subplots

    if not isinstance(data, pl.DataFrame):
        data = pl.DataFrame(data)

    missing = [c for c in (x_col, y_col, group_col) if c not in data.columns]
    if missing:
        raise InvalidArgument(f"Missing required columns: {missing}")
    if check_non_negative('alpha', alpha) > 1:
        raise InvalidArgument(f"alpha must be in [0, 1], got {alpha}")

    if facet and facet_col not in data.columns:
        logger.warning("Facet column '%s' not found, plotting a single panel", facet_col)
        facet = False

    if facet:
        levels = data[facet_col].unique().sort().to_list()
        fig = make_subplots(
            rows=len(levels), cols=1,
            shared_xaxes=True,
            # plotly caps spacing at 1 / (rows - 1)
            vertical_spacing=min(0.04, 0.5 / len(levels)),
            subplot_titles=[f"{facet_col} = {lvl}" for lvl in levels],
        )
        for row, lvl in enumerate(levels, start=1):
            panel = data.filter(pl.col(facet_col) == lvl)
            _add_panel(fig, panel, x_col, y_col, group_col, alpha,
                       row=row, show_mean_legend=(row == 1))
        fig.update_xaxes(title_text=x_col, row=len(levels), col=1)
        fig.update_layout(height=max(300, 220 * len(levels)))
    else:
        fig = go.Figure()
        _add_panel(fig, data, x_col, y_col, group_col, alpha)
        fig.update_xaxes(title_text=x_col)
        fig.update_layout(height=400)

    fig.update_yaxes(title_text=y_col)
    fig.update_layout(
        showlegend=True,
        margin=dict(l=60, r=30, t=40, b=40),
    )

    if show:
        fig.show()

    return fig
