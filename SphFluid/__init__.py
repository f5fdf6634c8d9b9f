# -- SphFluid Package -- #

'''
2D fluid simulation using Smoothed Particle Hydrodynamics (SPH).

Dam break on a uniform neighbor grid with the Muller kernels,
a linear equation of state, and reflective domain walls.

Sean Bowman [10/19/2026]
'''

__version__ = '0.1.0'

from SphFluid.sph.protocols import SimulationConfig
from SphFluid.sph.sphSolver import SphSolver
from SphFluid.runner import FluidSimRunner
