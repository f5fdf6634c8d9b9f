'''Shared fixtures for the SphFluid test suite.'''

import numpy as np
import pytest

from SphFluid.sph.protocols import SimulationConfig
from SphFluid.sph.particles import ParticleSystem
from SphFluid.sph.sphSolver import SphSolver


@pytest.fixture
def boxConfig():
    '''Small 160 x 128 box with the default fluid constants.'''
    return SimulationConfig(domainWidth=160.0, domainHeight=128.0, nParticles=20, seed=3)


@pytest.fixture
def damConfig():
    '''Default dam break domain with a reduced, seeded particle count.'''
    return SimulationConfig(nParticles=100, seed=11)


@pytest.fixture
def makeSolver():
    '''Factory: solver initialized with explicit particle positions (and velocities).'''

    def _make(config, positions, velocities=None):
        solver = SphSolver(config)
        solver.initialize(ParticleSystem.fromPositions(np.asarray(positions, dtype=float), velocities))
        return solver

    return _make
