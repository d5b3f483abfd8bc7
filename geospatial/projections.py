"""
Generalized Transverse Mercator Projection.

One parameterized forward/inverse Transverse Mercator serves every grid in
this library: the British National Grid, the Irish Grid and the 60 UTM
zones differ only in ellipsoid, scale factor, true origin and false origin.

Scientific Context
------------------
Domain: Cartography, mathematical geodesy
Model: Gauss-Krüger Transverse Mercator, Redfearn series

The meridional arc is expanded to third order in n = (a - b)/(a + b); the
forward projection uses coefficients I..VI and the inverse VII..XIIA. The
inverse first solves the meridional arc for the footpoint latitude by
fixed-point iteration, then corrects the series result by re-projecting it
until it reproduces the input easting and northing.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain,
  Annex C (Transverse Mercator map projection formulae).
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from common.config import get_config
from common.errors import ProjectionConvergenceError
from common.logging_config import get_logger
from geospatial.coordinate_models import (
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)
from geospatial.ellipsoid import Ellipsoid

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransverseMercatorGrid:
    """Transverse Mercator projection with a false origin.
    
    A conformal projection tangent to the central meridian. Accuracy of the
    series is at the millimetre level within a few degrees of the central
    meridian.
    
    Parameters
    ----------
    name : str
        Human-readable name of the grid.
    ellipsoid : Ellipsoid
        Reference ellipsoid.
    scale_factor : float
        Scale factor F0 on the central meridian.
    origin_latitude : float
        Latitude φ0 of the true origin, in degrees.
    origin_longitude : float
        Longitude λ0 of the true origin (central meridian), in degrees.
    false_easting : float
        Easting E0 of the true origin in meters.
    false_northing : float
        Northing N0 of the true origin in meters.
    """
    name: str
    ellipsoid: Ellipsoid
    scale_factor: float
    origin_latitude: float
    origin_longitude: float
    false_easting: float
    false_northing: float
    
    @property
    def proj4_string(self) -> str:
        """PROJ.4 definition string."""
        return (
            f"+proj=tmerc +lat_0={self.origin_latitude} +lon_0={self.origin_longitude} "
            f"+k={self.scale_factor} +x_0={self.false_easting} +y_0={self.false_northing} "
            f"+a={self.ellipsoid.a} +b={self.ellipsoid.b} +units=m +no_defs"
        )
    
    def meridional_arc(self, latitude_rad: float) -> float:
        """Scaled meridional arc M from the origin latitude to ``latitude_rad``.
        
        Parameters
        ----------
        latitude_rad : float
            Geodetic latitude in radians.
            
        Returns
        -------
        float
            Developed arc length in meters (already multiplied by F0).
        """
        n = self.ellipsoid.n
        phi0 = np.radians(self.origin_latitude)
        d = latitude_rad - phi0
        s = latitude_rad + phi0
        
        Ma = (1 + n + (5.0 / 4.0) * n**2 + (5.0 / 4.0) * n**3) * d
        Mb = (3 * n + 3 * n**2 + (21.0 / 8.0) * n**3) * np.sin(d) * np.cos(s)
        Mc = ((15.0 / 8.0) * n**2 + (15.0 / 8.0) * n**3) * np.sin(2 * d) * np.cos(2 * s)
        Md = (35.0 / 24.0) * n**3 * np.sin(3 * d) * np.cos(3 * s)
        
        return self.ellipsoid.b * self.scale_factor * (Ma - Mb + Mc - Md)
    
    def _radii(self, latitude_rad: float) -> Tuple[float, float, float]:
        # Scaled transverse and meridional radii of curvature, and η²
        nu = self.scale_factor * radius_of_curvature_prime_vertical(latitude_rad, self.ellipsoid)
        rho = self.scale_factor * radius_of_curvature_meridian(latitude_rad, self.ellipsoid)
        return nu, rho, nu / rho - 1.0
    
    def to_projected(self, latitude_deg: float, longitude_deg: float) -> Tuple[float, float]:
        """Project geodetic coordinates onto the grid.
        
        Parameters
        ----------
        latitude_deg, longitude_deg : float
            Geodetic coordinates in degrees, on this grid's ellipsoid.
            
        Returns
        -------
        Tuple[float, float]
            (easting, northing) in meters.
        """
        phi = np.radians(latitude_deg)
        dl = np.radians(longitude_deg) - np.radians(self.origin_longitude)
        
        sin_phi = np.sin(phi)
        cos_phi = np.cos(phi)
        tan2 = np.tan(phi) ** 2
        
        nu, rho, eta2 = self._radii(phi)
        M = self.meridional_arc(phi)
        
        I = M + self.false_northing
        II = (nu / 2.0) * sin_phi * cos_phi
        III = (nu / 24.0) * sin_phi * cos_phi**3 * (5.0 - tan2 + 9.0 * eta2)
        IIIA = (nu / 720.0) * sin_phi * cos_phi**5 * (61.0 - 58.0 * tan2 + tan2**2)
        IV = nu * cos_phi
        V = (nu / 6.0) * cos_phi**3 * (nu / rho - tan2)
        VI = (nu / 120.0) * cos_phi**5 * (
            5.0 - 18.0 * tan2 + tan2**2 + 14.0 * eta2 - 58.0 * tan2 * eta2
        )
        
        northing = I + II * dl**2 + III * dl**4 + IIIA * dl**6
        easting = self.false_easting + IV * dl + V * dl**3 + VI * dl**5
        
        return float(easting), float(northing)
    
    def footpoint_latitude(
        self,
        northing: float,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None
    ) -> float:
        """Solve M(φ') = N - N0 for the footpoint latitude φ' in radians.
        
        Raises
        ------
        ProjectionConvergenceError
            If the residual is still above ``tolerance`` after
            ``max_iterations`` updates.
        """
        if tolerance is None:
            tolerance = get_config("projection", "arc_tolerance_m")
        if max_iterations is None:
            max_iterations = get_config("projection", "max_iterations")
        
        aF0 = self.ellipsoid.a * self.scale_factor
        target = northing - self.false_northing
        
        phi = target / aF0 + np.radians(self.origin_latitude)
        residual = target - self.meridional_arc(phi)
        iterations = 0
        
        while abs(residual) >= tolerance:
            if iterations >= max_iterations:
                logger.warning(
                    f"{self.name}: footpoint latitude did not converge after "
                    f"{iterations} iterations (residual={residual:.6e} m)"
                )
                raise ProjectionConvergenceError(
                    f"Inverse projection on {self.name} did not converge for "
                    f"northing {northing} (residual {residual:.6e} m)"
                )
            phi += residual / aF0
            residual = target - self.meridional_arc(phi)
            iterations += 1
        
        logger.debug(f"{self.name}: footpoint latitude converged in {iterations} iterations")
        return phi
    
    def to_geodetic(
        self,
        easting: float,
        northing: float,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None
    ) -> Tuple[float, float]:
        """Recover geodetic coordinates from grid coordinates.
        
        Parameters
        ----------
        easting, northing : float
            Grid coordinates in meters.
            
        Returns
        -------
        Tuple[float, float]
            (latitude_deg, longitude_deg) on this grid's ellipsoid.
            
        Notes
        -----
        The series result loses accuracy far from the central meridian, so it
        is corrected by re-projecting until the grid residual is below
        ``tolerance``. Grid coordinates with no latitude in [-90, 90] are
        returned uncorrected for the caller to reject.
        
        Raises
        ------
        ProjectionConvergenceError
            If the footpoint or the correction does not converge within
            ``max_iterations``.
        """
        if tolerance is None:
            tolerance = get_config("projection", "arc_tolerance_m")
        if max_iterations is None:
            max_iterations = get_config("projection", "max_iterations")
        
        phi, lam = self._series_inverse(easting, northing, tolerance, max_iterations)
        if not np.isfinite(phi) or abs(phi) > np.pi / 2:
            return float(np.degrees(phi)), float(np.degrees(lam))
        
        iterations = 0
        while True:
            projected_e, projected_n = self.to_projected(np.degrees(phi), np.degrees(lam))
            residual_e = easting - projected_e
            residual_n = northing - projected_n
            if np.hypot(residual_e, residual_n) < tolerance:
                break
            if iterations >= max_iterations:
                logger.warning(
                    f"{self.name}: inverse correction did not converge after "
                    f"{iterations} iterations (residual E={residual_e:.6e} m, "
                    f"N={residual_n:.6e} m)"
                )
                raise ProjectionConvergenceError(
                    f"Inverse projection on {self.name} did not converge for "
                    f"({easting}, {northing})"
                )
            nu, rho, _ = self._radii(phi)
            phi += residual_n / rho
            lam += residual_e / (nu * np.cos(phi))
            iterations += 1
        
        logger.debug(f"{self.name}: inverse corrected in {iterations} iterations")
        return float(np.degrees(phi)), float(np.degrees(lam))
    
    def _series_inverse(
        self,
        easting: float,
        northing: float,
        tolerance: float,
        max_iterations: int
    ) -> Tuple[float, float]:
        # Redfearn inverse series, coefficients VII..XIIA; radians out
        phi_p = self.footpoint_latitude(northing, tolerance, max_iterations)
        
        nu, rho, eta2 = self._radii(phi_p)
        tan_phi = np.tan(phi_p)
        tan2 = tan_phi**2
        sec_phi = 1.0 / np.cos(phi_p)
        
        VII = tan_phi / (2.0 * rho * nu)
        VIII = tan_phi / (24.0 * rho * nu**3) * (5.0 + 3.0 * tan2 + eta2 - 9.0 * tan2 * eta2)
        IX = tan_phi / (720.0 * rho * nu**5) * (61.0 + 90.0 * tan2 + 45.0 * tan2**2)
        X = sec_phi / nu
        XI = sec_phi / (6.0 * nu**3) * (nu / rho + 2.0 * tan2)
        XII = sec_phi / (120.0 * nu**5) * (5.0 + 28.0 * tan2 + 24.0 * tan2**2)
        XIIA = sec_phi / (5040.0 * nu**7) * (
            61.0 + 662.0 * tan2 + 1320.0 * tan2**2 + 720.0 * tan2**3
        )
        
        dE = easting - self.false_easting
        
        phi = phi_p - VII * dE**2 + VIII * dE**4 - IX * dE**6
        lam = np.radians(self.origin_longitude) + X * dE - XI * dE**3 + XII * dE**5 - XIIA * dE**7
        
        return float(phi), float(lam)
