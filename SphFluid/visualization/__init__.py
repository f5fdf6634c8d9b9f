# -- Visualization Package -- #

'''
Plotly renderers for SPH particle frames.

Sean Bowman [10/19/2026]
'''

from SphFluid.visualization.particlePlots import plotParticles, PlotlySnapshotRenderer
