# -- Uniform Cell Grid for Neighbor Search -- #

'''
Uniform grid cell lists for neighbor search in 2D SPH.

Divides the domain into square cells whose size equals the kernel
support radius. Any particle within the support radius of a query
point therefore lies in the 3x3 block of cells around the point's
own cell, so only those 9 cells are searched.

The grid is rebuilt from scratch every step. Cells are addressed by
a single integer id (cellCountX * iy + ix) and hold the indices of
their particles in ascending order.

References:
-----------
Ihmsen et al. (2011) -- Parallel Neighbor-Search for SPH
Green (2010) -- Particle Simulation using CUDA

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import math

import numpy as np


class UniformCellGrid:
    '''
    Fixed-extent uniform grid over a rectangular 2D domain.

    Positions must lie inside [0, domainWidth) x [0, domainHeight).
    The solver guarantees this by clamping positions during the
    boundary pass; a position outside the grid is a programming
    error and trips an assertion.

    Parameters:
    -----------
    cellSize : float
        Grid cell size, must equal the kernel support radius
    domainWidth : float
        Domain extent along x
    domainHeight : float
        Domain extent along y
    '''

    # 3x3 stencil around the particle's own cell
    _stencil: tuple[tuple[int, int], ...] = tuple(
        (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)
    )

    def __init__(self, cellSize: float, domainWidth: float, domainHeight: float) -> None:
        self._cellSize = cellSize
        self._cellCountX = math.ceil(domainWidth / cellSize)
        self._cellCountY = math.ceil(domainHeight / cellSize)
        self._cells: dict[int, np.ndarray] = {}
        self._nParticles = 0

    @property
    def cellSize(self) -> float:
        '''Grid cell size.'''
        return self._cellSize

    @property
    def shape(self) -> tuple[int, int]:
        '''Grid extent (cellCountX, cellCountY).'''
        return (self._cellCountX, self._cellCountY)

    @property
    def nOccupiedCells(self) -> int:
        '''Number of cells holding at least one particle.'''
        return len(self._cells)

    def cellId(self, ix: int, iy: int) -> int:
        '''Flat cell id for integer cell coordinates.'''
        return self._cellCountX * iy + ix

    def cellCoordinates(self, position: np.ndarray) -> tuple[int, int]:
        '''
        Integer cell coordinates (ix, iy) of a position.

        Raises:
        -------
        AssertionError : If the position lies outside the grid
        '''
        ix = math.floor(position[0] / self._cellSize)
        iy = math.floor(position[1] / self._cellSize)
        if not (0 <= ix < self._cellCountX and 0 <= iy < self._cellCountY):
            raise AssertionError(
                f'position ({position[0]}, {position[1]}) maps to cell ({ix}, {iy}) '
                f'outside the {self._cellCountX} x {self._cellCountY} grid'
            )
        return (ix, iy)

    def cellParticles(self, cellId: int) -> np.ndarray:
        '''Particle indices stored in a cell (empty if unoccupied).'''
        return self._cells.get(cellId, np.empty(0, dtype=np.int64))

    ######################################################################
    # -- Build -- #
    ######################################################################

    def build(self, positions: np.ndarray) -> None:
        '''
        Rebuild the grid from particle positions.

        Clears the previous contents and bins every particle into the
        cell containing it. Within a cell, indices stay in ascending
        order.

        Parameters:
        -----------
        positions : np.ndarray
            Particle positions, shape (N, 2)

        Raises:
        -------
        AssertionError : If any position lies outside the grid
        '''
        self._cells.clear()
        self._nParticles = len(positions)
        if self._nParticles == 0:
            return

        cellCoords = np.floor(positions / self._cellSize)

        inside = (
            (cellCoords[:, 0] >= 0) & (cellCoords[:, 0] < self._cellCountX)
            & (cellCoords[:, 1] >= 0) & (cellCoords[:, 1] < self._cellCountY)
        )
        if not np.all(inside):
            bad = int(np.flatnonzero(~inside)[0])
            raise AssertionError(
                f'particle {bad} at ({positions[bad, 0]}, {positions[bad, 1]}) '
                f'lies outside the {self._cellCountX} x {self._cellCountY} grid'
            )

        cellCoords = cellCoords.astype(np.int64)
        cellIds = self._cellCountX * cellCoords[:, 1] + cellCoords[:, 0]

        # Group particle indices by cell; the stable sort keeps them ascending
        order = np.argsort(cellIds, kind='stable')
        uniqueIds, starts = np.unique(cellIds[order], return_index=True)
        groups = np.split(order, starts[1:])

        self._cells = {int(cid): group for cid, group in zip(uniqueIds, groups)}

    ######################################################################
    # -- Queries -- #
    ######################################################################

    def query(self, position: np.ndarray) -> np.ndarray:
        '''
        Indices of all particles in the 3x3 cell block around a position.

        The result includes the queried particle itself when the
        position belongs to a particle. Offset cells outside the grid
        are skipped. Order is unspecified; there are no duplicates.

        Parameters:
        -----------
        position : np.ndarray
            Query position, shape (2,)

        Returns:
        --------
        np.ndarray : Candidate neighbor indices
        '''
        ix, iy = self.cellCoordinates(position)
        return self._stencilParticles(ix, iy)

    def queryPairs(self) -> tuple[np.ndarray, np.ndarray]:
        '''
        All candidate pairs from the 3x3 stencil, self pairs included.

        Pair (i, j) is present exactly when j is in query(position_i),
        so both (i, j) and (j, i) appear and every particle is paired
        with itself. Particles sharing a cell share one stencil lookup.

        Returns:
        --------
        tuple[np.ndarray, np.ndarray] :
            (iIndices, jIndices) arrays of candidate pairs
        '''
        iChunks: list[np.ndarray] = []
        jChunks: list[np.ndarray] = []

        for cellId, cellParticles in self._cells.items():
            iy, ix = divmod(cellId, self._cellCountX)
            neighbors = self._stencilParticles(ix, iy)

            iChunks.append(np.repeat(cellParticles, len(neighbors)))
            jChunks.append(np.tile(neighbors, len(cellParticles)))

        if not iChunks:
            return (np.empty(0, dtype=np.int64), np.empty(0, dtype=np.int64))

        return (np.concatenate(iChunks), np.concatenate(jChunks))

    def _stencilParticles(self, ix: int, iy: int) -> np.ndarray:
        '''Concatenated particle indices of the in-grid cells around (ix, iy).'''
        chunks: list[np.ndarray] = []

        for dx, dy in self._stencil:
            jx = ix + dx
            jy = iy + dy
            if not (0 <= jx < self._cellCountX and 0 <= jy < self._cellCountY):
                continue

            members = self._cells.get(self.cellId(jx, jy))
            if members is not None:
                chunks.append(members)

        if not chunks:
            return np.empty(0, dtype=np.int64)
        return np.concatenate(chunks)
