# -- Simulation Scenarios Package -- #

'''
Pre-configured initial conditions for the SPH fluid simulation.

Each scenario turns a SimulationConfig into a seeded particle
system.

Sean Bowman [10/19/2026]
'''

from SphFluid.scenarios.damBreak import createDamBreak, damLattice
