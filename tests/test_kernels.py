'''Tests for the Muller smoothing kernels.'''

import math

import numpy as np
import pytest

from SphFluid.sph.kernels import MullerKernels


def testNormalizationConstants():
    '''Constants follow the 2D Muller normalizations for h.'''
    h = 16.0
    kernels = MullerKernels(h)

    assert kernels.poly6 == pytest.approx(4.0 / (math.pi * h ** 8))
    assert kernels.spikyGrad == pytest.approx(-10.0 / (math.pi * h ** 5))
    assert kernels.viscLap == pytest.approx(40.0 / (math.pi * h ** 5))
    assert kernels.radiusSq == pytest.approx(h * h)


def testDensityKernelSelfValue():
    '''At r = 0 the poly6 kernel is poly6 * h^6.'''
    kernels = MullerKernels(16.0)
    assert kernels.density(0.0) == pytest.approx(kernels.poly6 * 16.0 ** 6)


def testKernelsVanishAtSupportRadius():
    '''The support test is strict: r = h contributes nothing.'''
    h = 16.0
    kernels = MullerKernels(h)

    assert kernels.density(h * h) == 0.0
    assert kernels.pressureGradient(h) == 0.0
    assert kernels.viscosityLaplacian(h) == 0.0
    assert kernels.density(2.0 * h * h) == 0.0


def testBatchMatchesScalar():
    '''Vectorized evaluation agrees with the scalar path inside and outside the support.'''
    kernels = MullerKernels(10.0)
    r = np.array([0.0, 1.5, 4.0, 9.99, 10.0, 12.0])

    np.testing.assert_allclose(
        kernels.densityBatch(r * r), [kernels.density(x * x) for x in r],
    )
    np.testing.assert_allclose(
        kernels.pressureGradientBatch(r), [kernels.pressureGradient(x) for x in r],
    )
    np.testing.assert_allclose(
        kernels.viscosityLaplacianBatch(r), [kernels.viscosityLaplacian(x) for x in r],
    )


def testSpikyGradientIsNegativeInsideSupport():
    '''The spiky gradient magnitude is negative and grows toward r = 0.'''
    kernels = MullerKernels(16.0)
    values = kernels.pressureGradientBatch(np.array([0.0, 4.0, 8.0, 12.0]))

    assert np.all(values < 0.0)
    assert np.all(np.diff(values) > 0.0)
