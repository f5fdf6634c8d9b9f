# -- SPH Time Integration -- #

'''
Fixed-step explicit time integration for the SPH particle system.

Implements forward (explicit) Euler on force per unit density:

    v(t+dt) = v(t) + dt * F(t) / rho(t)
    x(t+dt) = x(t) + dt * v(t+dt)

Particles whose density is below the empty-space threshold get no
acceleration, since dividing by their density is meaningless.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from typing import Protocol

import numpy as np

from SphFluid import constants as const
from SphFluid.sph.particles import ParticleSystem


######################################################################
# -- Time Integrator Protocol -- #
######################################################################

class TimeIntegrator(Protocol):
    '''Protocol for time integration schemes.'''

    def integrate(self, particles: ParticleSystem, dt: float) -> None:
        '''
        Advance all particles by one time step.

        Parameters:
        -----------
        particles : ParticleSystem
            Particle system to advance
        dt : float
            Time step size
        '''
        ...


######################################################################
# -- Forward Euler Integrator -- #
######################################################################

class ForwardEuler:
    '''
    Explicit Euler integrator driven by force / density.

    Parameters:
    -----------
    densityEpsilon : float
        Densities below this produce zero acceleration
    '''

    def __init__(self, densityEpsilon: float = const.densityEpsilon) -> None:
        self._densityEpsilon = densityEpsilon

    def integrate(self, particles: ParticleSystem, dt: float) -> None:
        '''
        Advance all particles by one time step.

        Parameters:
        -----------
        particles : ParticleSystem
            Particle system to advance
        dt : float
            Time step size
        '''
        densities = particles.densities
        occupied = densities >= self._densityEpsilon

        # Velocity: acceleration is force per unit density
        safeDensity = np.where(occupied, densities, 1.0)
        accelerations = np.where(
            occupied[:, np.newaxis],
            particles.forces / safeDensity[:, np.newaxis],
            0.0,
        )
        particles.velocities += dt * accelerations

        # Position from the updated velocity
        particles.positions += dt * particles.velocities
