import numpy as np

from .settings import REGIME_BAND

def velocity(Q: float, A: float) -> float:
    """Mean velocity Q/A; zero for a dry section."""
    if A <= 0.0:
        return 0.0
    return Q / A

def conveyance(A: float, n: float, R: float, k: float = 1.0) -> float:
    """Computes conveyance.

    Args:
        A (float): Flow area.
        n (float): Roughness.
        R (float): Hydraulic radius.
        k (float, optional): Manning unit coefficient (1.0 SI, 1.49 US). Defaults to 1.0.

    Returns:
        float: K
    """
    return k * A * R**(2/3) / n

def normal_flow(bed_slope, area: float = None, roughness: float = None, hydraulic_radius: float = None,
                K: float = None, k: float = 1.0):
    """Discharge carried under uniform flow (Manning's equation).

    Args:
        bed_slope (float): Longitudinal bed slope.
        area (float, optional): Flow area.
        roughness (float, optional): Manning's n.
        hydraulic_radius (float, optional): Hydraulic radius.
        K (float, optional): Conveyance, used instead of (area, roughness, hydraulic_radius) when given.
        k (float, optional): Manning unit coefficient. Defaults to 1.0.

    Returns:
        float: Q
    """
    if K is None:
        K = conveyance(A=area, n=roughness, R=hydraulic_radius, k=k)

    Q = K * np.abs(bed_slope)**0.5

    if bed_slope < 0:
        Q = -Q

    return float(Q)

def Sf(Q: float, A: float = None, n: float = None, R: float = None, K: float = None, k: float = 1.0) -> float:
    """Computes friction slope using Manning's equation.

    Args:
        Q (float): Flow rate
        A (float): Cross-sectional flow area.
        n (float): Manning's roughness coefficient.
        R (float): Hydraulic radius.
        K (float, optional): Conveyance.
        k (float, optional): Manning unit coefficient. Defaults to 1.0.

    Returns:
        float: Friction slope.
    """
    if K is None:
        if A is None or A <= 0.0 or R is None or R <= 0.0:
            return 0.0
        K = conveyance(A=A, n=n, R=R, k=k)

    return Q * np.abs(Q) / K**2

def froude_num(T: float, A: float, Q: float, g: float):
    """Computes the Froude number.

    Args:
        T (float): Top width.
        A (float): Flow area.
        Q (float): Flow rate.
        g (float): Gravitational acceleration.

    Returns:
        float: The Froude number.
    """
    if T <= 0.0 or A <= 0.0:
        return 0.0

    V = Q/A
    D = A/T
    return V / np.sqrt(g*D)

def specific_energy(y: float, V: float, g: float) -> float:
    """E = y + V^2 / 2g"""
    return y + V**2 / (2.0 * g)

def specific_force(A: float, centroid_depth: float, Q: float, g: float) -> float:
    """Momentum function M = A*y_bar + Q^2 / (g*A).

    Args:
        A (float): Flow area.
        centroid_depth (float): Depth of the area centroid below the free surface.
        Q (float): Flow rate.
        g (float): Gravitational acceleration.

    Returns:
        float: Specific force per unit weight.
    """
    if A <= 0.0:
        return 0.0
    return A * centroid_depth + Q**2 / (g * A)

def shear_stress(R: float, Sf: float, gamma: float) -> float:
    """Mean boundary shear stress tau = gamma * R * Sf."""
    return gamma * R * Sf

def flow_regime(Fr: float) -> str:
    """Classifies a Froude number, treating Fr within the reporting band of 1 as critical."""
    if Fr < 1.0 - REGIME_BAND:
        return 'subcritical'
    elif Fr > 1.0 + REGIME_BAND:
        return 'supercritical'
    else:
        return 'critical'
