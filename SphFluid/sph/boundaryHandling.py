# -- SPH Boundary Conditions -- #

'''
Reflective walls for a rectangular SPH domain.

Particles that come within the boundary epsilon of a wall are
clamped back to that distance and their velocity component normal
to the wall is multiplied by a negative damping factor, producing a
lossy bounce. Clamping also keeps every position inside the neighbor
grid for the next rebuild.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import numpy as np

from SphFluid.sph.particles import ParticleSystem


class BoundaryHandler:
    '''
    Clamps particles into a rectangle and damps their wall-normal velocity.

    Parameters:
    -----------
    domainMin : np.ndarray
        Lower corner of the domain, shape (2,)
    domainMax : np.ndarray
        Upper corner of the domain, shape (2,)
    epsilon : float
        Distance kept between particles and the walls
    damping : float
        Velocity scale on contact, strictly inside (-1, 0)
    '''

    def __init__(
        self,
        domainMin: np.ndarray,
        domainMax: np.ndarray,
        epsilon: float,
        damping: float,
    ) -> None:
        self._domainMin = np.array(domainMin, dtype=float)
        self._domainMax = np.array(domainMax, dtype=float)
        self._epsilon = epsilon
        self._damping = damping

    @property
    def lowerLimit(self) -> np.ndarray:
        '''Smallest allowed position per axis.'''
        return self._domainMin + self._epsilon

    @property
    def upperLimit(self) -> np.ndarray:
        '''Largest allowed position per axis.'''
        return self._domainMax - self._epsilon

    def enforce(self, particles: ParticleSystem) -> None:
        '''
        Apply wall reflection to every particle, axis by axis.

        The low wall is checked before the high wall; a particle can
        only touch one of them per axis since the domain is wider
        than twice the epsilon.

        Parameters:
        -----------
        particles : ParticleSystem
            Particle system to constrain (modified in place)
        '''
        positions = particles.positions
        velocities = particles.velocities

        for axis in range(2):
            low = self._domainMin[axis] + self._epsilon
            high = self._domainMax[axis] - self._epsilon

            belowLow = positions[:, axis] < low
            velocities[belowLow, axis] *= self._damping
            positions[belowLow, axis] = low

            aboveHigh = positions[:, axis] > high
            velocities[aboveHigh, axis] *= self._damping
            positions[aboveHigh, axis] = high
