# -- Dam Break Scenario -- #

'''
Dam break initial conditions.

Fills a column of fluid, one kernel radius apart, starting at the
top wall gap and spanning the second quarter of the domain width.
Each particle is nudged along x by a small random jitter so the
column does not collapse as a perfect lattice.

Row y values start at the boundary epsilon and advance by h while
y < domainHeight - 2 * epsilon; column x values start at
domainWidth / 4 and advance by h while x <= domainWidth / 2.
Seeding stops when the requested particle count is reached or the
column is full.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math

import numpy as np

from SphFluid.sph.protocols import SimulationConfig
from SphFluid.sph.particles import ParticleSystem


def damLattice(config: SimulationConfig) -> np.ndarray:
    '''
    Unjittered dam positions in seeding order (row by row).

    Parameters:
    -----------
    config : SimulationConfig
        Simulation configuration

    Returns:
    --------
    np.ndarray : Lattice positions, shape (M, 2), at most nParticles rows
    '''
    h = config.kernelRadius
    eps = config.boundaryEpsilon

    # Rows: eps + k*h < domainHeight - 2*eps
    rowLimit = config.domainHeight - 2.0 * eps
    nRows = max(0, math.ceil((rowLimit - eps) / h))

    # Columns: W/4 + k*h <= W/2
    xStart = config.domainWidth / 4.0
    xEnd = config.domainWidth / 2.0
    nCols = math.floor((xEnd - xStart) / h) + 1

    ys = eps + h * np.arange(nRows)
    xs = xStart + h * np.arange(nCols)

    xx, yy = np.meshgrid(xs, ys, indexing='xy')
    positions = np.column_stack([xx.ravel(), yy.ravel()])

    return positions[:config.nParticles]


def createDamBreak(
    config: SimulationConfig,
    rng: np.random.Generator | None = None,
) -> ParticleSystem:
    '''
    Create the dam break particle system from configuration.

    Parameters:
    -----------
    config : SimulationConfig
        Simulation configuration (domain, kernel radius, seeding)
    rng : np.random.Generator | None
        Jitter source (default: seeded from config.seed)

    Returns:
    --------
    ParticleSystem : Particles at rest in the dam column
    '''
    if rng is None:
        rng = np.random.default_rng(config.seed)

    positions = damLattice(config)
    jitter = rng.uniform(0.0, config.jitterAmplitude, size=len(positions))
    positions[:, 0] += jitter

    print(f'initializing dam break with {len(positions)} particles')

    return ParticleSystem.fromPositions(positions)
