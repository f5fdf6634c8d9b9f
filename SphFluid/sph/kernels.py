# -- SPH Smoothing Kernels -- #

'''
Muller smoothing kernels for 2D SPH.

Three kernels share one support radius h:

    poly6 (density):          W(r)        = 4 / (pi * h^8) * (h^2 - r^2)^3
    spiky (pressure):         dW/dr(r)    = -10 / (pi * h^5) * (h - r)^3
    viscosity (Laplacian):    lap W(r)    = 40 / (pi * h^5) * (h - r)

All kernels vanish at and beyond the support radius. The
normalization constants depend only on h, so they are computed
once when the kernel set is created and reused every step.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math

import numpy as np


class MullerKernels:
    '''
    Poly6, spiky-gradient and viscosity-Laplacian kernels in 2D.

    Parameters:
    -----------
    kernelRadius : float
        Support radius h
    '''

    def __init__(self, kernelRadius: float) -> None:
        h = kernelRadius
        self._radius = h
        self._radiusSq = h * h

        self._poly6 = 4.0 / (math.pi * h ** 8)
        self._spikyGrad = -10.0 / (math.pi * h ** 5)
        self._viscLap = 40.0 / (math.pi * h ** 5)

    @property
    def radius(self) -> float:
        '''Support radius h.'''
        return self._radius

    @property
    def radiusSq(self) -> float:
        '''Squared support radius h^2.'''
        return self._radiusSq

    @property
    def poly6(self) -> float:
        '''Poly6 normalization 4 / (pi h^8).'''
        return self._poly6

    @property
    def spikyGrad(self) -> float:
        '''Spiky gradient normalization -10 / (pi h^5).'''
        return self._spikyGrad

    @property
    def viscLap(self) -> float:
        '''Viscosity Laplacian normalization 40 / (pi h^5).'''
        return self._viscLap

    ######################################################################
    # -- Scalar Evaluation -- #
    ######################################################################

    def density(self, rSq: float) -> float:
        '''
        Poly6 kernel value from a squared distance.

        The support test is strict: a neighbor exactly at r = h
        contributes nothing.

        Parameters:
        -----------
        rSq : float
            Squared distance between particles

        Returns:
        --------
        float : W(r)
        '''
        if rSq >= self._radiusSq:
            return 0.0
        diff = self._radiusSq - rSq
        return self._poly6 * diff * diff * diff

    def pressureGradient(self, r: float) -> float:
        '''Spiky gradient magnitude at distance r (zero for r >= h).'''
        if r >= self._radius:
            return 0.0
        diff = self._radius - r
        return self._spikyGrad * diff * diff * diff

    def viscosityLaplacian(self, r: float) -> float:
        '''Viscosity Laplacian at distance r (zero for r >= h).'''
        if r >= self._radius:
            return 0.0
        return self._viscLap * (self._radius - r)

    ######################################################################
    # -- Batch Evaluation -- #
    ######################################################################

    def densityBatch(self, rSq: np.ndarray) -> np.ndarray:
        '''
        Vectorized poly6 kernel over an array of squared distances.

        Parameters:
        -----------
        rSq : np.ndarray
            Squared pair distances, shape (nPairs,)

        Returns:
        --------
        np.ndarray : Kernel values, zero outside the support
        '''
        diff = np.maximum(self._radiusSq - rSq, 0.0)
        return self._poly6 * diff * diff * diff

    def pressureGradientBatch(self, r: np.ndarray) -> np.ndarray:
        '''Vectorized spiky gradient magnitude, zero outside the support.'''
        diff = np.maximum(self._radius - r, 0.0)
        return self._spikyGrad * diff * diff * diff

    def viscosityLaplacianBatch(self, r: np.ndarray) -> np.ndarray:
        '''Vectorized viscosity Laplacian, zero outside the support.'''
        return self._viscLap * np.maximum(self._radius - r, 0.0)
