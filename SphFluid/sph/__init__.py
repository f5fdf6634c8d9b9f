# -- SPH Engine Package -- #

'''
Core Smoothed Particle Hydrodynamics (SPH) engine.

Provides the Muller kernels, particle system, uniform cell grid,
reflective walls, forward Euler integration, and the solver.

Sean Bowman [10/19/2026]
'''

from SphFluid.sph.protocols import SimulationConfig, SimulationState, ParticleView
from SphFluid.sph.kernels import MullerKernels
from SphFluid.sph.particles import ParticleSystem
from SphFluid.sph.neighborSearch import UniformCellGrid
from SphFluid.sph.sphSolver import SphSolver, pressureForceTerm
