'''Elliptica: single-body elliptical orbit stepping
Track class definition'''

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from typing import Optional, Tuple
from .config import config


class Track:
    """
    Positions recorded over a run of consecutive ticks.

    Produced by ``Orbit.run()``. A Track is immutable: its arrays are
    read-only and it keeps no reference to the Orbit that made it.

    Attributes:
        positions: (n, 2) positions in the caller's frame
        standard_coords: (n, 2) canonical-frame coordinates
        tick_numbers: (n,) tick counter value after each tick
        focus: focus position in the caller's frame
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, positions, standard_coords, tick_numbers,
                 focus: Tuple[float, float] = (0.0, 0.0)):
        positions = np.array(positions, dtype=float)
        standard_coords = np.array(standard_coords, dtype=float)
        tick_numbers = np.array(tick_numbers, dtype=int)

        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"Positions must have shape (n, 2), got {positions.shape}")
        if standard_coords.shape != positions.shape:
            raise ValueError(
                f"Canonical coordinates shape {standard_coords.shape} does not "
                f"match positions shape {positions.shape}")
        if tick_numbers.shape != (positions.shape[0],):
            raise ValueError(
                f"Expected {positions.shape[0]} tick numbers, "
                f"got shape {tick_numbers.shape}")

        for arr in (positions, standard_coords, tick_numbers):
            arr.flags.writeable = False
        self._positions = positions
        self._standard_coords = standard_coords
        self._tick_numbers = tick_numbers
        self._focus = (float(focus[0]), float(focus[1]))

    # ========== PROPERTY ACCESS ==========
    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def standard_coords(self) -> np.ndarray:
        return self._standard_coords

    @property
    def tick_numbers(self) -> np.ndarray:
        return self._tick_numbers

    @property
    def focus(self) -> Tuple[float, float]:
        return self._focus

    @property
    def first_tick(self) -> int:
        return int(self._tick_numbers[0])

    @property
    def last_tick(self) -> int:
        return int(self._tick_numbers[-1])

    # ========== UTILITY METHODS ==========
    def to_dataframe(self) -> pd.DataFrame:
        """
        Export track to pandas DataFrame.

        Returns:
            DataFrame with columns tick, x, y, standard_x, standard_y
        """
        data = {
            'tick': self._tick_numbers,
            'x': self._positions[:, 0],
            'y': self._positions[:, 1],
            'standard_x': self._standard_coords[:, 0],
            'standard_y': self._standard_coords[:, 1],
        }
        return pd.DataFrame(data)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return self._positions.shape[0]

    def __getitem__(self, key):
        # track[k] -> (x, y) of the k-th recorded tick
        return self._positions[key]

    def __iter__(self):
        return (tuple(float(v) for v in row) for row in self._positions)

    def __repr__(self):
        return (f"Track(n={len(self)}, ticks={self.first_tick}..{self.last_tick}, "
                f"focus={self._focus})")

    # ========== PLOTTING ==========
    # inspection plots only; the host application does its own rendering
    def plot_2d(self, show_focus: bool = True,
                focus_color: Optional[str] = None,
                track_color: Optional[str] = None) -> go.Figure:
        """
        Create 2D plot of the track with optional focus marker.

        Parameters:
            show_focus: Whether to mark the focus (default: True)
            focus_color: Color of focus marker (default: config.DEFAULT_FOCUS_COLOR)
            track_color: Color of track line (default: config.DEFAULT_TRACK_COLOR)

        Returns:
            Plotly Figure object
        """
        if focus_color is None:
            focus_color = config.DEFAULT_FOCUS_COLOR
        if track_color is None:
            track_color = config.DEFAULT_TRACK_COLOR

        fig = go.Figure()

        if show_focus:
            fig.add_trace(go.Scatter(
                x=[self._focus[0]],
                y=[self._focus[1]],
                mode='markers',
                marker=dict(color=focus_color, size=12),
                name='Focus',
                hoverinfo='name'
            ))

        fig.add_trace(go.Scatter(
            x=self._positions[:, 0],
            y=self._positions[:, 1],
            mode='lines',
            line=dict(color=track_color, width=2),
            name='Track',
            customdata=self._tick_numbers,
            hovertemplate='tick %{customdata}<br>x: %{x:.4f}<br>y: %{y:.4f}<extra></extra>'
        ))

        fig.update_layout(
            xaxis_title='X',
            yaxis_title='Y',
            yaxis=dict(scaleanchor='x', scaleratio=1),
            title='Orbit Track',
            showlegend=True
        )
        return fig

    def add_to_plot(self, fig: go.Figure, color: Optional[str] = None,
                    name: Optional[str] = None, **kwargs) -> go.Figure:
        """
        Add this track to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            color: Color of track line (default: config.DEFAULT_TRACK_COLOR_ADD)
            name: Legend name for this track (default: 'Track N')
            **kwargs: Additional arguments passed to Scatter

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        if color is None:
            color = config.DEFAULT_TRACK_COLOR_ADD
        if name is None:
            n_existing = sum(1 for trace in fig.data
                             if isinstance(trace, go.Scatter) and trace.mode == 'lines')
            name = f'Track {n_existing + 1}'

        fig.add_trace(go.Scatter(
            x=self._positions[:, 0],
            y=self._positions[:, 1],
            mode='lines',
            line=dict(color=color, width=2),
            name=name,
            **kwargs
        ))
        return fig
