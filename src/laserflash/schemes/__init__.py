"""
Fully implicit finite-difference schemes.

Import the concrete schemes from their modules, or use
:func:`laserflash.schemes.solver.solve`.
"""
