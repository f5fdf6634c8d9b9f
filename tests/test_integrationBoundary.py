'''Tests for forward Euler integration and the reflective walls.'''

import numpy as np
import pytest

from SphFluid.sph.boundaryHandling import BoundaryHandler
from SphFluid.sph.particles import ParticleSystem
from SphFluid.sph.timeIntegration import ForwardEuler


def _particles(positions, velocities, forces=None, densities=None):
    p = ParticleSystem.fromPositions(np.array(positions, dtype=float), velocities)
    if forces is not None:
        p.forces = np.array(forces, dtype=float)
    if densities is not None:
        p.densities = np.array(densities, dtype=float)
    return p


def testForwardEulerUsesForcePerDensity():
    '''v += dt * F / rho, then x += dt * v with the new velocity.'''
    p = _particles([[10.0, 10.0]], [[1.0, -2.0]], forces=[[4.0, 8.0]], densities=[2.0])
    ForwardEuler().integrate(p, dt=0.5)

    np.testing.assert_allclose(p.velocities[0], [2.0, 0.0])
    np.testing.assert_allclose(p.positions[0], [11.0, 10.0])


def testForwardEulerSkipsEmptyDensity():
    '''A zero-density particle keeps its velocity and just drifts.'''
    p = _particles([[10.0, 10.0]], [[3.0, 0.0]], forces=[[100.0, 100.0]], densities=[0.0])
    ForwardEuler().integrate(p, dt=1.0)

    np.testing.assert_allclose(p.velocities[0], [3.0, 0.0])
    np.testing.assert_allclose(p.positions[0], [13.0, 10.0])
    assert np.all(np.isfinite(p.velocities))


@pytest.fixture
def walls():
    return BoundaryHandler(
        domainMin=np.zeros(2), domainMax=np.array([100.0, 80.0]),
        epsilon=5.0, damping=-0.5,
    )


def testLowWallClampsAndDamps(walls):
    '''Below the low edge plus epsilon: clamp to it and flip-damp the velocity.'''
    p = _particles([[3.0, 40.0], [50.0, 1.0]], [[-4.0, 1.0], [2.0, -6.0]])
    walls.enforce(p)

    np.testing.assert_allclose(p.positions, [[5.0, 40.0], [50.0, 5.0]])
    np.testing.assert_allclose(p.velocities, [[2.0, 1.0], [2.0, 3.0]])


def testHighWallClampsAndDamps(walls):
    '''Above the high edge minus epsilon: clamp to it and flip-damp the velocity.'''
    p = _particles([[99.0, 40.0], [50.0, 78.0]], [[4.0, 0.0], [0.0, 10.0]])
    walls.enforce(p)

    np.testing.assert_allclose(p.positions, [[95.0, 40.0], [50.0, 75.0]])
    np.testing.assert_allclose(p.velocities, [[-2.0, 0.0], [0.0, -5.0]])


def testCornerHitsBothAxes(walls):
    '''A particle past a corner is reflected on both axes.'''
    p = _particles([[-1.0, 90.0]], [[-2.0, 2.0]])
    walls.enforce(p)

    np.testing.assert_allclose(p.positions[0], [5.0, 75.0])
    np.testing.assert_allclose(p.velocities[0], [1.0, -1.0])


def testInteriorParticlesUntouched(walls):
    '''Particles inside the allowed box are not modified.'''
    p = _particles([[5.0, 5.0], [50.0, 40.0], [95.0, 75.0]], [[1.0, 1.0], [-1.0, 2.0], [3.0, -3.0]])
    positionsBefore = p.positions.copy()
    velocitiesBefore = p.velocities.copy()
    walls.enforce(p)

    np.testing.assert_array_equal(p.positions, positionsBefore)
    np.testing.assert_array_equal(p.velocities, velocitiesBefore)
    np.testing.assert_allclose(walls.lowerLimit, [5.0, 5.0])
    np.testing.assert_allclose(walls.upperLimit, [95.0, 75.0])
