# -- SPH Particle System -- #

'''
Dataclass representing the SPH particle system state.

Stores positions, velocities, forces, densities and pressures as
contiguous NumPy arrays for vectorized operations. Mass and the
other fluid constants are shared by every particle and live in
the simulation configuration instead.

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class ParticleSystem:
    '''
    SPH particle system state.

    Vector quantities have shape (nParticles, 2) and scalar
    quantities have shape (nParticles,). Row i of every array
    belongs to particle i; indices are stable for the whole run.

    Parameters:
    -----------
    positions : np.ndarray
        Particle positions, shape (N, 2)
    velocities : np.ndarray
        Particle velocities, shape (N, 2)
    forces : np.ndarray
        Accumulated forces of the current step, shape (N, 2)
    densities : np.ndarray
        Densities of the current step, shape (N,)
    pressures : np.ndarray
        Pressures of the current step, shape (N,)
    '''

    positions: np.ndarray
    velocities: np.ndarray
    forces: np.ndarray
    densities: np.ndarray
    pressures: np.ndarray

    @property
    def nParticles(self) -> int:
        '''Number of particles.'''
        return self.positions.shape[0]

    def validate(self) -> None:
        '''
        Check that every array agrees on the particle count and shape.

        Raises:
        -------
        ValueError : If any array has the wrong shape
        '''
        n = self.nParticles
        if self.positions.shape != (n, 2):
            raise ValueError(f'positions must have shape (N, 2), got {self.positions.shape}')

        expected = {
            'velocities': (n, 2),
            'forces': (n, 2),
            'densities': (n,),
            'pressures': (n,),
        }
        for name, shape in expected.items():
            actual = getattr(self, name).shape
            if actual != shape:
                raise ValueError(f'{name} must have shape {shape}, got {actual}')

    def kineticEnergy(self, mass: float) -> float:
        '''
        Total kinetic energy.

        KE = (1/2) * m * sum_i |v_i|^2

        Parameters:
        -----------
        mass : float
            Particle mass (shared by all particles)

        Returns:
        --------
        float : Kinetic energy
        '''
        speedsSq = np.sum(self.velocities * self.velocities, axis=1)
        return float(0.5 * mass * np.sum(speedsSq))

    def maxSpeed(self) -> float:
        '''Maximum velocity magnitude (0 for an empty system).'''
        if self.nParticles == 0:
            return 0.0
        return float(np.max(np.linalg.norm(self.velocities, axis=1)))

    def densityRange(self) -> tuple[float, float]:
        '''(min, max) density, (0, 0) for an empty system.'''
        if self.nParticles == 0:
            return (0.0, 0.0)
        return (float(np.min(self.densities)), float(np.max(self.densities)))

    def maxDensityError(self, restDensity: float) -> float:
        '''
        Maximum relative density error.

        Returns max |rho_i - rho_0| / rho_0

        Parameters:
        -----------
        restDensity : float
            Rest density rho_0

        Returns:
        --------
        float : Maximum relative density error (dimensionless)
        '''
        if self.nParticles == 0:
            return 0.0
        errors = np.abs(self.densities - restDensity) / restDensity
        return float(np.max(errors))

    @classmethod
    def fromPositions(
        cls,
        positions: np.ndarray,
        velocities: np.ndarray | None = None,
    ) -> ParticleSystem:
        '''
        Create a particle system at rest (or with given velocities).

        Forces, densities and pressures start at zero; they are only
        meaningful after the solver's passes have run.

        Parameters:
        -----------
        positions : np.ndarray
            Initial positions, shape (N, 2)
        velocities : np.ndarray | None
            Initial velocities, shape (N, 2) (default: zero)

        Returns:
        --------
        ParticleSystem : New particle system
        '''
        positions = np.array(positions, dtype=float).reshape(-1, 2)
        nParticles = positions.shape[0]

        if velocities is None:
            velocities = np.zeros((nParticles, 2))
        else:
            velocities = np.array(velocities, dtype=float).reshape(-1, 2)

        return cls(
            positions=positions,
            velocities=velocities,
            forces=np.zeros((nParticles, 2)),
            densities=np.zeros(nParticles),
            pressures=np.zeros(nParticles),
        )
