# -- Physical Constants for the SPH Dam Break -- #

'''
Physical and numerical constants for the 2D SPH dam break.

Values are in simulation (screen) units: the domain is measured in
pixels and the y axis grows downward, so gravity points along +y.
The constants follow the classic Muller et al. setup, tuned for a
stable run at a fixed small time step.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications

Sean Bowman [10/19/2026]
'''

#--------------------------------------------------------------------#
# -- Domain -- #
#--------------------------------------------------------------------#

# Simulation domain width [px]
domainWidth: float = 800.0

# Simulation domain height [px]
domainHeight: float = 600.0

#--------------------------------------------------------------------#
# -- Fluid Properties -- #
#--------------------------------------------------------------------#

# Rest density: pressure is zero at this density
restDensity: float = 300.0

# Gas constant for the linear equation of state p = k * (rho - rho_0)
gasConstant: float = 2000.0

# Viscosity coefficient
viscosity: float = 200.0

# Particle mass (shared by every particle)
particleMass: float = 2.5

# Gravity vector (x, y); +y is down in screen coordinates
gravity: tuple[float, float] = (0.0, 10.0)

#--------------------------------------------------------------------#
# -- SPH Numerical Parameters -- #
#--------------------------------------------------------------------#

# Kernel support radius h, also the neighbor grid cell size
kernelRadius: float = 16.0

# Fixed integration time step
timeStep: float = 0.0007

# Velocity scale on wall contact, must lie in (-1, 0)
boundaryDamping: float = -0.5

# Distance kept between particles and the domain walls
boundaryEpsilon: float = kernelRadius

# Densities below this are treated as empty space (no force, no acceleration)
densityEpsilon: float = 1e-12

#--------------------------------------------------------------------#
# -- Seeding -- #
#--------------------------------------------------------------------#

# Number of particles seeded into the dam
damParticles: int = 500

# Upper bound of the uniform x jitter added to each seeded particle
jitterAmplitude: float = 1.0

#--------------------------------------------------------------------#
# -- Runner -- #
#--------------------------------------------------------------------#

# Steps run by the command-line runner when none are given
defaultSteps: int = 2000

# Steps between progress bar diagnostic refreshes
reportInterval: int = 50
