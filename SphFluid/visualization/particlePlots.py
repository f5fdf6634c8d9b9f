# -- Particle Field Plots -- #

'''
Plotly rendering of SPH particle frames.

Draws the particles of one frame as filled circles inside the
domain rectangle. Screen orientation is kept: the y axis is
reversed so y grows downward, matching the simulation coordinates.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import os
from typing import Sequence

import numpy as np
import plotly.graph_objects as go

from SphFluid.sph.protocols import ParticleView
from SphFluid.visualization import theme


def plotParticles(
    views: Sequence[ParticleView],
    domainWidth: float,
    domainHeight: float,
    title: str = 'SPH Dam Break',
    plotWidth: int = 800,
) -> go.Figure:
    '''
    Scatter plot of one particle frame.

    Marker diameters are scaled from the particle draw radius so one
    domain unit maps to plotWidth / domainWidth pixels.

    Parameters:
    -----------
    views : Sequence[ParticleView]
        Particle draw records for the frame
    domainWidth : float
        Domain extent along x
    domainHeight : float
        Domain extent along y
    title : str
        Figure title
    plotWidth : int
        Plot area width in pixels

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    pixelsPerUnit = plotWidth / domainWidth
    plotHeight = int(round(domainHeight * pixelsPerUnit))

    if views:
        positions = np.array([v.position for v in views], dtype=float)
        sizes = [2.0 * v.radius * pixelsPerUnit for v in views]
    else:
        positions = np.empty((0, 2))
        sizes = []

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=positions[:, 0], y=positions[:, 1],
        mode='markers', name='particles',
        marker=dict(size=sizes, color=theme.PARTICLE, line=dict(width=0)),
    ))

    # Domain walls
    fig.add_shape(
        type='rect', x0=0.0, y0=0.0, x1=domainWidth, y1=domainHeight,
        line=dict(color=theme.WALL, width=1),
    )

    fig.update_layout(
        title=title,
        template=theme.TEMPLATE,
        width=plotWidth,
        height=plotHeight,
        showlegend=False,
        margin=dict(l=0, r=0, t=40, b=0),
    )
    fig.update_xaxes(range=[0.0, domainWidth], showgrid=False, zeroline=False)
    fig.update_yaxes(
        range=[domainHeight, 0.0], showgrid=False, zeroline=False,
        scaleanchor='x', scaleratio=1,
    )

    return fig


class PlotlySnapshotRenderer:
    '''
    Renderer that keeps the most recent frame as a Plotly figure.

    Usage:
        renderer = PlotlySnapshotRenderer(domainWidth, domainHeight)
        # During simulation loop:
        renderer.render(solver.particles)
        # After simulation:
        renderer.save('output/damBreak.html')

    Parameters:
    -----------
    domainWidth : float
        Domain extent along x
    domainHeight : float
        Domain extent along y
    title : str
        Figure title
    '''

    def __init__(self, domainWidth: float, domainHeight: float, title: str = 'SPH Dam Break') -> None:
        self._domainWidth = domainWidth
        self._domainHeight = domainHeight
        self._title = title
        self._latest: tuple[ParticleView, ...] = ()
        self._nFrames = 0

    @property
    def nFrames(self) -> int:
        '''Number of frames rendered so far.'''
        return self._nFrames

    def render(self, views: Sequence[ParticleView]) -> None:
        '''Record a frame; the figure is built only when requested.'''
        self._latest = tuple(views)
        self._nFrames += 1

    @property
    def figure(self) -> go.Figure:
        '''Figure of the latest rendered frame.'''
        return plotParticles(
            self._latest,
            self._domainWidth,
            self._domainHeight,
            title=f'{self._title} (frame {self._nFrames})',
        )

    def save(self, path: str) -> str:
        '''
        Write the latest frame as a standalone HTML file.

        Parameters:
        -----------
        path : str
            Output file path

        Returns:
        --------
        str : Path to the written file
        '''
        outputDir = os.path.dirname(path)
        if outputDir:
            os.makedirs(outputDir, exist_ok=True)

        self.figure.write_html(path)
        return path
