# -- Fluid Simulation Runner -- #

'''
Command-line entry point for running the SPH dam break.

Loads the configuration, runs the solver for a fixed number of
steps with a progress bar, hands every frame to an optional
renderer, and prints a summary.

Usage:
    python -m SphFluid                                   # Default dam break
    python -m SphFluid --steps 5000 --particles 300
    python -m SphFluid --config configs/damBreak_default.json
    python -m SphFluid --snapshot output/damBreak.html   # Plot final frame

Sean Bowman [10/19/2026]
'''

from __future__ import annotations

import argparse
import time as timeModule

from tqdm import tqdm

from SphFluid import constants as const
from SphFluid.sph.protocols import SimulationConfig, ParticleRenderer
from SphFluid.sph.sphSolver import SphSolver
from SphFluid.visualization.particlePlots import PlotlySnapshotRenderer


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='SphFluid -- 2D SPH dam break simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file',
    )
    parser.add_argument(
        '--steps', type=int, default=const.defaultSteps,
        help=f'Number of time steps to run (default: {const.defaultSteps})',
    )
    parser.add_argument(
        '--particles', type=int, default=None,
        help='Number of dam particles (overrides the configuration)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for the seeding jitter (overrides the configuration)',
    )
    parser.add_argument(
        '--snapshot', type=str, default=None,
        help='Write the final frame as a Plotly HTML file at this path',
    )
    parser.add_argument(
        '--no-progress', action='store_true',
        help='Disable the progress bar',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class FluidSimRunner:
    '''
    Runs an SPH simulation and reports on it.

    Handles the full pipeline: solver setup, simulation loop with
    progress reporting, per-frame rendering and the final summary.
    '''

    def runFromConfig(
        self,
        configPath: str,
        nSteps: int = const.defaultSteps,
        renderer: ParticleRenderer | None = None,
        showProgress: bool = True,
    ) -> dict:
        '''
        Run the simulation from a JSON configuration file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file
        nSteps : int
            Number of time steps
        renderer : ParticleRenderer | None
            Receives the particle draw records after every step
        showProgress : bool
            Whether to show the progress bar

        Returns:
        --------
        dict : Simulation results summary
        '''
        config = SimulationConfig.fromJson(configPath)
        return self.run(config, nSteps=nSteps, renderer=renderer, showProgress=showProgress)

    def run(
        self,
        config: SimulationConfig,
        nSteps: int = const.defaultSteps,
        renderer: ParticleRenderer | None = None,
        showProgress: bool = True,
    ) -> dict:
        '''
        Run a dam break simulation.

        Parameters:
        -----------
        config : SimulationConfig
            Simulation configuration
        nSteps : int
            Number of time steps
        renderer : ParticleRenderer | None
            Receives the particle draw records after every step
        showProgress : bool
            Whether to show the progress bar

        Returns:
        --------
        dict : Simulation results summary
        '''
        print()
        print('=' * 62)
        print('  SPHFLUID -- SPH DAM BREAK SIMULATION')
        print('=' * 62)
        print()

        #--------------------------------------------------------------------#
        # Scenario Setup
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  SCENARIO SETUP')
        print('-' * 62)

        solver = SphSolver(config)
        solver.initialize()
        particles = solver.particleSystem

        cellCountX, cellCountY = config.gridShape
        print(f'  Domain:            {config.domainWidth:8.1f} x {config.domainHeight:.1f}')
        print(f'  Kernel Radius:     {config.kernelRadius:8.3f}')
        print(f'  Grid Cells:        {cellCountX:8d} x {cellCountY}')
        print(f'  Particles:         {particles.nParticles:8d}')
        print(f'  Time Step:         {config.timeStep:8.2e}')
        print(f'  Steps:             {nSteps:8d}')
        print()

        #--------------------------------------------------------------------#
        # Solver Constants
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  SOLVER CONSTANTS')
        print('-' * 62)

        kernels = solver.kernels
        print(f'  Poly6:             {kernels.poly6:12.4e}')
        print(f'  Spiky Gradient:    {kernels.spikyGrad:12.4e}')
        print(f'  Visc Laplacian:    {kernels.viscLap:12.4e}')
        print(f'  Rest Density:      {config.restDensity:12.2f}')
        print(f'  Gas Constant:      {config.gasConstant:12.2f}')
        print(f'  Viscosity:         {config.viscosity:12.2f}')
        print()

        if renderer is not None:
            renderer.render(solver.particles)

        #--------------------------------------------------------------------#
        # Simulation Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING SIMULATION')
        print('-' * 62)

        wallClockStart = timeModule.time()

        progress = tqdm(range(nSteps), desc='  Stepping', unit='step', disable=not showProgress)
        for stepIndex in progress:
            solver.step()

            if renderer is not None:
                renderer.render(solver.particles)

            if stepIndex % const.reportInterval == 0:
                state = solver.currentState
                progress.set_postfix(
                    maxVel=f'{state.maxVelocity:.2f}',
                    densErr=f'{state.maxDensityError * 100:.1f}%',
                )

        wallClockSeconds = timeModule.time() - wallClockStart
        finalState = solver.currentState

        print()
        print(f'  Simulation complete.')
        print(f'  Total steps:       {finalState.step:8d}')
        print(f'  Simulated time:    {finalState.time:8.4f}')
        print(f'  Wall-clock time:   {wallClockSeconds:8.1f} s')
        print()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        print('=' * 62)
        print('  SIMULATION SUMMARY')
        print('=' * 62)
        print(f'  Final KE:          {finalState.kineticEnergy:12.4f}')
        print(f'  Max Velocity:      {finalState.maxVelocity:12.4f}')
        print(f'  Density Range:     {finalState.minDensity:12.4f} - {finalState.maxDensity:.4f}')
        print(f'  Max Density Error: {finalState.maxDensityError * 100:12.3f} %')
        print('=' * 62)
        print()

        return {
            'finalState': finalState,
            'wallClockSeconds': wallClockSeconds,
            'nSteps': nSteps,
        }


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    if args.config:
        config = SimulationConfig.fromJson(args.config)
    else:
        config = SimulationConfig()
    config = config.withOverrides(nParticles=args.particles, seed=args.seed)

    renderer = None
    if args.snapshot:
        renderer = PlotlySnapshotRenderer(config.domainWidth, config.domainHeight)

    runner = FluidSimRunner()
    runner.run(
        config,
        nSteps=args.steps,
        renderer=renderer,
        showProgress=not args.no_progress,
    )

    if renderer is not None:
        snapshotPath = renderer.save(args.snapshot)
        print(f'  Snapshot written to: {snapshotPath}')
        print()


if __name__ == '__main__':
    main()
