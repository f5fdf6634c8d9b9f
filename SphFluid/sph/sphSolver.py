# -- SPH Fluid Solver -- #

'''
Fixed-step SPH solver with a linear equation of state.

Pressure is computed from density with a linear (ideal gas style)
equation of state, p = k * (rho - rho_0), so pressure goes negative
when a particle is less dense than the rest density and pulls its
neighbors inward.

All pair computations are vectorized using NumPy. The solver works
on arrays of candidate neighbor pairs from the uniform cell grid
rather than looping over individual particles.

Algorithm per time step:
    1. Rebuild the uniform cell grid from current positions
    2. Compute density by poly6 summation (self contribution included)
    3. Compute pressure from the linear equation of state
    4. Compute forces (spiky pressure + viscosity Laplacian + gravity)
    5. Integrate (forward Euler on force / density)
    6. Enforce reflective walls

Each pass finishes for every particle before the next pass reads
its results.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications
Monaghan (1992) -- Smoothed Particle Hydrodynamics

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import numpy as np

from SphFluid import constants as const
from SphFluid.sph.protocols import SimulationConfig, SimulationState, ParticleView
from SphFluid.sph.kernels import MullerKernels
from SphFluid.sph.particles import ParticleSystem
from SphFluid.sph.neighborSearch import UniformCellGrid
from SphFluid.sph.boundaryHandling import BoundaryHandler
from SphFluid.sph.timeIntegration import ForwardEuler
from SphFluid.scenarios.damBreak import createDamBreak


######################################################################
# -- Pairwise Pressure Term -- #
######################################################################

def pressureForceTerm(
    rij: np.ndarray,
    r: np.ndarray,
    pressureSum: np.ndarray,
    kernels: MullerKernels,
) -> np.ndarray:
    '''
    Raw pairwise pressure force before mass and density scaling.

    term_ij = -(r_ij / |r_ij|) * (p_i + p_j) * spikyGrad * (h - r)^3

    with r_ij = x_j - x_i. Swapping i and j flips r_ij and leaves
    the pressure sum unchanged, so term_ji = -term_ij. Coincident
    particles (r = 0) get a zero direction.

    Parameters:
    -----------
    rij : np.ndarray
        Pair displacement vectors x_j - x_i, shape (nPairs, 2)
    r : np.ndarray
        Pair distances |rij|, shape (nPairs,)
    pressureSum : np.ndarray
        p_i + p_j per pair, shape (nPairs,)
    kernels : MullerKernels
        Kernel set providing the spiky gradient

    Returns:
    --------
    np.ndarray : Pressure term per pair, shape (nPairs, 2)
    '''
    safeR = np.where(r > 0.0, r, 1.0)
    direction = np.where((r > 0.0)[:, np.newaxis], rij / safeR[:, np.newaxis], 0.0)
    magnitude = pressureSum * kernels.pressureGradientBatch(r)
    return -direction * magnitude[:, np.newaxis]


######################################################################
# -- Solver -- #
######################################################################

class SphSolver:
    '''
    2D SPH solver for a fixed rectangular domain.

    Owns the particle system for the lifetime of the run. The cell
    grid is a transient view rebuilt from positions every step and
    never modifies particle data.

    Parameters:
    -----------
    config : SimulationConfig
        Simulation configuration (domain, fluid constants, time step)
    '''

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self._kernels = MullerKernels(config.kernelRadius)
        self._integrator = ForwardEuler(densityEpsilon=const.densityEpsilon)
        self._boundaryHandler = BoundaryHandler(
            domainMin=np.zeros(2),
            domainMax=config.domainSize,
            epsilon=config.boundaryEpsilon,
            damping=config.boundaryDamping,
        )

        # Cell size equals the kernel radius so the 3x3 stencil covers the support
        self._neighborGrid = UniformCellGrid(
            cellSize=config.kernelRadius,
            domainWidth=config.domainWidth,
            domainHeight=config.domainHeight,
        )

        self._particles: ParticleSystem | None = None
        self._time: float = 0.0
        self._step: int = 0

    ######################################################################
    # -- Initialization -- #
    ######################################################################

    def initialize(self, particles: ParticleSystem | None = None) -> None:
        '''
        Adopt or seed the particle system and compute initial density.

        Parameters:
        -----------
        particles : ParticleSystem | None
            Initial particles; when omitted, a dam break is seeded
            from the configuration
        '''
        if particles is None:
            particles = createDamBreak(self._config)
        particles.validate()

        self._particles = particles
        self._time = 0.0
        self._step = 0

        # Densities and pressures are valid from the start for diagnostics
        self._neighborGrid.build(particles.positions)
        self._computeDensityPressure(*self._neighborGrid.queryPairs())

    ######################################################################
    # -- Main Time Step -- #
    ######################################################################

    def step(self) -> None:
        '''
        Advance the simulation by one fixed time step.

        Raises:
        -------
        RuntimeError : If called before initialize()
        '''
        p = self._requireParticles()

        # 1. Rebuild the cell grid
        self._neighborGrid.build(p.positions)
        iIdx, jIdx = self._neighborGrid.queryPairs()

        # 2-3. Density and pressure for every particle
        self._computeDensityPressure(iIdx, jIdx)

        # 4. Forces (reads the completed densities and pressures)
        self._computeForces(iIdx, jIdx)

        # 5. Integrate
        self._integrator.integrate(p, self._config.timeStep)

        # 6. Walls (keeps positions inside the grid for the next rebuild)
        self._boundaryHandler.enforce(p)

        self._time += self._config.timeStep
        self._step += 1

    ######################################################################
    # -- Density and Pressure (Vectorized) -- #
    ######################################################################

    def _computeDensityPressure(self, iIdx: np.ndarray, jIdx: np.ndarray) -> None:
        '''
        Compute density by poly6 summation, then pressure.

        rho_i = sum_j m * poly6 * (h^2 - r_ij^2)^3    for r_ij^2 < h^2
        p_i   = k * (rho_i - rho_0)

        The self pair (j = i) is part of the candidate pairs, so the
        self contribution m * poly6 * h^6 is always included.
        '''
        p = self._particles
        config = self._config

        rij = p.positions[jIdx] - p.positions[iIdx]
        rSq = np.sum(rij * rij, axis=1)
        contributions = config.mass * self._kernels.densityBatch(rSq)

        p.densities = np.bincount(iIdx, weights=contributions, minlength=p.nParticles)
        p.pressures = config.gasConstant * (p.densities - config.restDensity)

    ######################################################################
    # -- Forces (Vectorized) -- #
    ######################################################################

    def _computeForces(self, iIdx: np.ndarray, jIdx: np.ndarray) -> None:
        '''
        Compute pressure, viscosity and gravity forces.

        Pressure (spiky gradient):
            f_i += -rhat_ij * m * (p_i + p_j) / (2 rho_j) * spikyGrad * (h - r)^3

        Viscosity (viscosity Laplacian):
            f_i += mu * m * (v_j - v_i) / rho_j * viscLap * (h - r)

        Gravity (once per particle):
            f_i += g * m / rho_i

        Pairs whose neighbor density is below the empty-space threshold
        contribute nothing, as does gravity on such a particle.
        '''
        p = self._particles
        config = self._config
        kernels = self._kernels
        epsilon = const.densityEpsilon

        p.forces = np.zeros_like(p.positions)

        # Gravity for every particle with a usable density
        occupied = p.densities >= epsilon
        safeDensity = np.where(occupied, p.densities, 1.0)
        p.forces[occupied] = (
            config.gravity * config.mass / safeDensity[occupied, np.newaxis]
        )

        # Interacting pairs: distinct particles inside the support
        rij = p.positions[jIdx] - p.positions[iIdx]
        r = np.linalg.norm(rij, axis=1)
        active = (iIdx != jIdx) & (r < kernels.radius) & occupied[jIdx]
        if not np.any(active):
            return

        iIdx = iIdx[active]
        jIdx = jIdx[active]
        rij = rij[active]
        r = r[active]
        rhoJ = p.densities[jIdx]

        # --- Pressure force --- #
        pressureTerm = pressureForceTerm(
            rij, r, p.pressures[iIdx] + p.pressures[jIdx], kernels,
        )
        fPressure = pressureTerm * (config.mass / (2.0 * rhoJ))[:, np.newaxis]

        # --- Viscosity force --- #
        dv = p.velocities[jIdx] - p.velocities[iIdx]
        viscCoeff = config.viscosity * config.mass / rhoJ * kernels.viscosityLaplacianBatch(r)
        fViscosity = dv * viscCoeff[:, np.newaxis]

        np.add.at(p.forces, iIdx, fPressure + fViscosity)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def particles(self) -> tuple[ParticleView, ...]:
        '''Read-only draw records (position, radius) for the renderer.'''
        p = self._requireParticles()
        radius = self._config.particleDrawRadius
        return tuple(
            ParticleView(position=(float(x), float(y)), radius=radius)
            for x, y in p.positions
        )

    @property
    def particleSystem(self) -> ParticleSystem:
        '''Access the particle system.'''
        return self._requireParticles()

    @property
    def currentState(self) -> SimulationState:
        '''Current simulation state snapshot.'''
        p = self._requireParticles()
        minDensity, maxDensity = p.densityRange()

        return SimulationState(
            time=self._time,
            step=self._step,
            kineticEnergy=p.kineticEnergy(self._config.mass),
            maxVelocity=p.maxSpeed(),
            minDensity=minDensity,
            maxDensity=maxDensity,
            maxDensityError=p.maxDensityError(self._config.restDensity),
        )

    @property
    def config(self) -> SimulationConfig:
        '''Simulation configuration.'''
        return self._config

    @property
    def kernels(self) -> MullerKernels:
        '''Kernel set derived from the configuration.'''
        return self._kernels

    @property
    def neighborGrid(self) -> UniformCellGrid:
        '''Cell grid as of the latest rebuild.'''
        return self._neighborGrid

    @property
    def time(self) -> float:
        '''Elapsed simulation time.'''
        return self._time

    @property
    def stepCount(self) -> int:
        '''Number of completed steps.'''
        return self._step

    def _requireParticles(self) -> ParticleSystem:
        if self._particles is None:
            raise RuntimeError('SphSolver.initialize() must be called before use')
        return self._particles
