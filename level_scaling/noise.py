# level_scaling/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 2D gradient noise on a triangular (simplex) lattice. It is
designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A 256-entry permutation table (int array) from permutation.py.
    - x, y: Scalars, or NumPy 2D arrays of coordinates for the grid form.
- Outputs:
    - A float (or array of floats), empirically within about [-1.23, 1.23]
      and in practice close to [-1, 1].
- Side Effects: None.
- Invariants: The grid form returns, per element, exactly what the scalar
  form returns for the same coordinates.
================================================================================
"""

import numpy as np
from numba import njit

# Skew constants for the 2D triangular lattice.
STRETCH_CONSTANT_2D = -0.211324865405187    # (1/sqrt(2+1)-1)/2
SQUISH_CONSTANT_2D = 0.366025403784439      # (sqrt(2+1)-1)/2

# Empirically derived to scale the summed contributions to roughly [-1, 1].
NORM_CONSTANT_2D = 47.0

# R^2 in the attenuation kernel (R^2 - |d|^2)^4.
ATTENUATION_R_SQUARED = 2.0

BYTE_MASK = 0xFF
# Picks an even slot (0, 2, ..., 14); shifted right it is a row of the table below.
GRADIENT_PAIR_MASK = 0x0E

# The 8 gradient directions, used cyclically by hashing.
GRADIENTS_2D = np.array([
    [5, 2], [2, 5],
    [-5, 2], [-2, 5],
    [5, -2], [2, -5],
    [-5, -2], [-2, -5],
], dtype=np.int64)


@njit
def _fast_floor(x):
    "Floor toward negative infinity."
    xi = int(x)
    return xi - 1 if x < xi else xi


@njit
def _extrapolate(p, xsb, ysb, dx, dy):
    """Dot product of the lattice vertex's hashed gradient with the offset."""
    p1 = p[xsb & BYTE_MASK]
    p2 = p[(p1 + ysb) & BYTE_MASK]
    g = GRADIENTS_2D[(p2 & GRADIENT_PAIR_MASK) >> 1]
    return g[0] * dx + g[1] * dy


@njit
def simplex_noise_2d(p, x, y):
    """
    Sample the noise field at a single point.

    The point is skewed onto the lattice and located inside a rhombus made of
    two triangles. The (1,0) and (0,1) vertices always contribute. Which
    triangle holds the point, and which third vertex lies closest, decide the
    remaining origin vertex and one extra vertex: six cases in all.
    """
    # Place input coordinates onto the grid.
    stretch_offset = (x + y) * STRETCH_CONSTANT_2D
    xs = x + stretch_offset
    ys = y + stretch_offset

    # Floor to get the rhombus super-cell origin.
    xsb = _fast_floor(xs)
    ysb = _fast_floor(ys)

    # Skew back out to get the actual coordinates of the rhombus origin.
    squish_offset = (xsb + ysb) * SQUISH_CONSTANT_2D
    xb = xsb + squish_offset
    yb = ysb + squish_offset

    # Grid coordinates relative to the rhombus origin.
    xins = xs - xsb
    yins = ys - ysb

    # Decides which of the two triangles we are in.
    in_sum = xins + yins

    # Positions relative to the origin point.
    dx0 = x - xb
    dy0 = y - yb

    value = 0.0

    # Contribution (1,0)
    dx1 = dx0 - 1 - SQUISH_CONSTANT_2D
    dy1 = dy0 - 0 - SQUISH_CONSTANT_2D
    attn1 = ATTENUATION_R_SQUARED - dx1 * dx1 - dy1 * dy1
    if attn1 > 0:
        attn1 *= attn1
        value += attn1 * attn1 * _extrapolate(p, xsb + 1, ysb + 0, dx1, dy1)

    # Contribution (0,1)
    dx2 = dx0 - 0 - SQUISH_CONSTANT_2D
    dy2 = dy0 - 1 - SQUISH_CONSTANT_2D
    attn2 = ATTENUATION_R_SQUARED - dx2 * dx2 - dy2 * dy2
    if attn2 > 0:
        attn2 *= attn2
        value += attn2 * attn2 * _extrapolate(p, xsb + 0, ysb + 1, dx2, dy2)

    if in_sum <= 1:
        # Inside the triangle at (0,0).
        zins = 1 - in_sum
        if zins > xins or zins > yins:
            # (0,0) is one of the two closest vertices.
            if xins > yins:
                xsv_ext = xsb + 1
                ysv_ext = ysb - 1
                dx_ext = dx0 - 1
                dy_ext = dy0 + 1
            else:
                xsv_ext = xsb - 1
                ysv_ext = ysb + 1
                dx_ext = dx0 + 1
                dy_ext = dy0 - 1
        else:
            # (1,0) and (0,1) are the two closest vertices.
            xsv_ext = xsb + 1
            ysv_ext = ysb + 1
            dx_ext = dx0 - 1 - 2 * SQUISH_CONSTANT_2D
            dy_ext = dy0 - 1 - 2 * SQUISH_CONSTANT_2D
    else:
        # Inside the triangle at (1,1).
        zins = 2 - in_sum
        if zins < xins or zins < yins:
            # (1,1) is one of the two closest vertices.
            if xins > yins:
                xsv_ext = xsb + 2
                ysv_ext = ysb + 0
                dx_ext = dx0 - 2 - 2 * SQUISH_CONSTANT_2D
                dy_ext = dy0 + 0 - 2 * SQUISH_CONSTANT_2D
            else:
                xsv_ext = xsb + 0
                ysv_ext = ysb + 2
                dx_ext = dx0 + 0 - 2 * SQUISH_CONSTANT_2D
                dy_ext = dy0 - 2 - 2 * SQUISH_CONSTANT_2D
        else:
            # (1,0) and (0,1) are the two closest vertices; the extra vertex
            # is the (0,0) corner of the rhombus.
            dx_ext = dx0
            dy_ext = dy0
            xsv_ext = xsb
            ysv_ext = ysb
        # Re-base the origin vertex to (1,1).
        xsb += 1
        ysb += 1
        dx0 = dx0 - 1 - 2 * SQUISH_CONSTANT_2D
        dy0 = dy0 - 1 - 2 * SQUISH_CONSTANT_2D

    # Contribution (0,0) or (1,1)
    attn0 = ATTENUATION_R_SQUARED - dx0 * dx0 - dy0 * dy0
    if attn0 > 0:
        attn0 *= attn0
        value += attn0 * attn0 * _extrapolate(p, xsb, ysb, dx0, dy0)

    # Extra vertex
    attn_ext = ATTENUATION_R_SQUARED - dx_ext * dx_ext - dy_ext * dy_ext
    if attn_ext > 0:
        attn_ext *= attn_ext
        value += attn_ext * attn_ext * _extrapolate(p, xsv_ext, ysv_ext, dx_ext, dy_ext)

    return value / NORM_CONSTANT_2D


@njit
def simplex_noise_grid(p, x, y):
    """
    Evaluate the noise field over 2D coordinate arrays.
    Uses explicit loops, which Numba compiles to efficient machine code.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            total_noise[i, j] = simplex_noise_2d(p, x[i, j], y[i, j])

    return total_noise
