# -- Visualization Theme -- #

'''
Centralized dark-mode theme for SphFluid Plotly visualizations.

Change colors or template here to restyle every plot at once.

Sean Bowman [10/19/2026]
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Particle fill (light blue on the dark background)
PARTICLE = '#3399FF'

# Domain outline
WALL = '#888888'

# Neutrals
WHITE = '#E0E0E0'
