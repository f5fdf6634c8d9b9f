# -- SPH Simulation Protocols -- #

'''
Configuration, result dataclasses, and protocols for the SPH solver.

Defines the core data structures (SimulationConfig, SimulationState,
ParticleView) and the protocols that the neighbor search, solver
and renderer collaborators satisfy.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass, field
from typing import Protocol, Sequence, TYPE_CHECKING

import numpy as np

from SphFluid import constants as const

if TYPE_CHECKING:
    from SphFluid.sph.particles import ParticleSystem


######################################################################
# -- Simulation Configuration -- #
######################################################################

@dataclass
class SimulationConfig:
    '''
    Configuration for a 2D SPH simulation.

    Defines the domain, fluid constants, numerical parameters and
    seeding parameters. Every particle shares the same physical
    constants; nothing here is per-particle state.

    Parameters:
    -----------
    domainWidth : float
        Domain extent along x
    domainHeight : float
        Domain extent along y
    kernelRadius : float
        Kernel support radius h (also the neighbor grid cell size)
    restDensity : float
        Density at which pressure is zero
    gasConstant : float
        Stiffness of the linear equation of state
    viscosity : float
        Viscosity coefficient
    gravity : np.ndarray
        Gravity vector, shape (2,)
    mass : float
        Mass of every particle
    timeStep : float
        Fixed integration time step
    boundaryDamping : float
        Velocity scale on wall contact, strictly inside (-1, 0)
    boundaryEpsilon : float
        Distance kept between particles and the domain walls
    nParticles : int
        Number of particles seeded into the dam
    jitterAmplitude : float
        Upper bound of the uniform x jitter applied while seeding
    seed : int | None
        Seed for the jitter generator (None draws fresh entropy)
    drawRadius : float | None
        Radius handed to the renderer (None uses h / 2)
    '''

    domainWidth: float = const.domainWidth
    domainHeight: float = const.domainHeight
    kernelRadius: float = const.kernelRadius
    restDensity: float = const.restDensity
    gasConstant: float = const.gasConstant
    viscosity: float = const.viscosity
    gravity: np.ndarray = field(default_factory=lambda: np.array(const.gravity, dtype=float))
    mass: float = const.particleMass
    timeStep: float = const.timeStep
    boundaryDamping: float = const.boundaryDamping
    boundaryEpsilon: float = const.boundaryEpsilon
    nParticles: int = const.damParticles
    jitterAmplitude: float = const.jitterAmplitude
    seed: int | None = None
    drawRadius: float | None = None

    def __post_init__(self) -> None:
        self.gravity = np.asarray(self.gravity, dtype=float)

        if self.gravity.shape != (2,):
            raise ValueError(f'gravity must be a 2D vector, got shape {self.gravity.shape}')

        for name in ('domainWidth', 'domainHeight', 'kernelRadius', 'mass', 'timeStep'):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f'{name} must be positive, got {value}')

        if self.nParticles <= 0:
            raise ValueError(f'nParticles must be positive, got {self.nParticles}')

        if not -1.0 < self.boundaryDamping < 0.0:
            raise ValueError(
                f'boundaryDamping must lie strictly between -1 and 0, got {self.boundaryDamping}'
            )

        # Positions clamped onto the far wall would fall outside the grid
        if self.boundaryEpsilon <= 0.0:
            raise ValueError(f'boundaryEpsilon must be positive, got {self.boundaryEpsilon}')

        # Walls must leave an interior for the clamped positions
        if 2.0 * self.boundaryEpsilon >= min(self.domainWidth, self.domainHeight):
            raise ValueError(
                f'boundaryEpsilon {self.boundaryEpsilon} leaves no interior in a '
                f'{self.domainWidth} x {self.domainHeight} domain'
            )

        # The far-wall clamp position must still land in the last grid cell
        for name, extent in (('domainWidth', self.domainWidth), ('domainHeight', self.domainHeight)):
            farCell = math.floor((extent - self.boundaryEpsilon) / self.kernelRadius)
            if farCell >= math.ceil(extent / self.kernelRadius):
                raise ValueError(
                    f'boundaryEpsilon {self.boundaryEpsilon} is too small to keep particles '
                    f'off the far wall of {name} {extent}'
                )

        if self.jitterAmplitude < 0.0:
            raise ValueError(f'jitterAmplitude must be non-negative, got {self.jitterAmplitude}')

        if self.drawRadius is not None and self.drawRadius <= 0.0:
            raise ValueError(f'drawRadius must be positive, got {self.drawRadius}')

    @property
    def domainSize(self) -> np.ndarray:
        '''Domain extent (width, height).'''
        return np.array([self.domainWidth, self.domainHeight])

    @property
    def gridShape(self) -> tuple[int, int]:
        '''Neighbor grid extent (cellCountX, cellCountY) for cells of size h.'''
        return (
            math.ceil(self.domainWidth / self.kernelRadius),
            math.ceil(self.domainHeight / self.kernelRadius),
        )

    @property
    def particleDrawRadius(self) -> float:
        '''Radius handed to the renderer.'''
        if self.drawRadius is not None:
            return self.drawRadius
        return 0.5 * self.kernelRadius

    def withOverrides(self, **changes) -> SimulationConfig:
        '''
        Copy of this configuration with some fields replaced.

        None values are ignored so CLI flags that were not given
        leave the loaded value untouched. The copy is validated.
        '''
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def fromJson(cls, configPath: str) -> SimulationConfig:
        '''
        Load configuration from a JSON file.

        Reads the 'domain', 'sph', 'fluid' and 'seeding' sections.
        Missing keys fall back to the defaults in constants.py.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        SimulationConfig : Loaded configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        domainSection = data.get('domain', {})
        sphSection = data.get('sph', {})
        fluidSection = data.get('fluid', {})
        seedingSection = data.get('seeding', {})

        kernelRadius = sphSection.get('kernelRadius', const.kernelRadius)

        return cls(
            domainWidth=domainSection.get('width', const.domainWidth),
            domainHeight=domainSection.get('height', const.domainHeight),
            kernelRadius=kernelRadius,
            restDensity=fluidSection.get('restDensity', const.restDensity),
            gasConstant=fluidSection.get('gasConstant', const.gasConstant),
            viscosity=fluidSection.get('viscosity', const.viscosity),
            gravity=np.array(fluidSection.get('gravity', const.gravity), dtype=float),
            mass=fluidSection.get('mass', const.particleMass),
            timeStep=sphSection.get('timeStep', const.timeStep),
            boundaryDamping=sphSection.get('boundaryDamping', const.boundaryDamping),
            # The wall gap tracks the kernel radius unless given explicitly
            boundaryEpsilon=sphSection.get('boundaryEpsilon', kernelRadius),
            nParticles=seedingSection.get('nParticles', const.damParticles),
            jitterAmplitude=seedingSection.get('jitterAmplitude', const.jitterAmplitude),
            seed=seedingSection.get('seed'),
            drawRadius=sphSection.get('drawRadius'),
        )


######################################################################
# -- Simulation State -- #
######################################################################

@dataclass
class SimulationState:
    '''
    Diagnostic snapshot of the simulation after a step.

    Parameters:
    -----------
    time : float
        Elapsed simulation time
    step : int
        Number of completed steps
    kineticEnergy : float
        Total kinetic energy of all particles
    maxVelocity : float
        Maximum particle speed
    minDensity : float
        Smallest particle density
    maxDensity : float
        Largest particle density
    maxDensityError : float
        Maximum relative density error |rho - rho_0| / rho_0
    '''

    time: float
    step: int
    kineticEnergy: float
    maxVelocity: float
    minDensity: float
    maxDensity: float
    maxDensityError: float


######################################################################
# -- Draw Record -- #
######################################################################

@dataclass(frozen=True)
class ParticleView:
    '''Read-only draw record: particle position and the radius to draw it with.'''

    position: tuple[float, float]
    radius: float


######################################################################
# -- Protocols -- #
######################################################################

class NeighborSearch(Protocol):
    '''Protocol for neighbor search structures.'''

    def build(self, positions: np.ndarray) -> None:
        '''Rebuild the structure from particle positions.'''
        ...

    def query(self, position: np.ndarray) -> np.ndarray:
        '''Indices of candidate neighbors around a position.'''
        ...

    def queryPairs(self) -> tuple[np.ndarray, np.ndarray]:
        '''All (i, j) candidate pairs, self pairs included.'''
        ...


class FluidSolver(Protocol):
    '''Protocol for fixed-step particle fluid solvers.'''

    def initialize(self, particles: ParticleSystem | None = None) -> None:
        '''Seed or adopt the particle collection.'''
        ...

    def step(self) -> None:
        '''Advance one fixed time step.'''
        ...

    @property
    def particles(self) -> tuple[ParticleView, ...]:
        '''Draw records for the renderer.'''
        ...


class ParticleRenderer(Protocol):
    '''Protocol for anything that draws a frame of particles.'''

    def render(self, views: Sequence[ParticleView]) -> None:
        '''Draw one frame.'''
        ...
