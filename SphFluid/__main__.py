# -- SphFluid Module Entry Point -- #

'''
Allows running the simulation with ``python -m SphFluid``.

Sean Bowman [10/19/2026]
'''

from SphFluid.runner import main


main()
