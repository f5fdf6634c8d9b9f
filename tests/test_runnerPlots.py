'''Smoke tests for the runner, CLI, and Plotly renderer.'''

import numpy as np

from SphFluid.runner import FluidSimRunner, buildParser, main
from SphFluid.sph.protocols import ParticleView, SimulationConfig
from SphFluid.visualization.particlePlots import PlotlySnapshotRenderer, plotParticles


class RecordingRenderer:
    '''Renderer stub that remembers every frame it was given.'''

    def __init__(self):
        self.frames = []

    def render(self, views):
        self.frames.append(tuple(views))


def testRunnerRendersEveryStep(capsys):
    '''The renderer gets the initial frame plus one frame per step.'''
    config = SimulationConfig(nParticles=40, seed=2)
    renderer = RecordingRenderer()

    result = FluidSimRunner().run(config, nSteps=5, renderer=renderer, showProgress=False)

    assert len(renderer.frames) == 6
    assert all(len(frame) == 40 for frame in renderer.frames)
    assert result['nSteps'] == 5
    assert result['finalState'].step == 5
    assert result['wallClockSeconds'] >= 0.0
    assert 'SIMULATION SUMMARY' in capsys.readouterr().out


def testRunFromConfig(tmp_path):
    configPath = tmp_path / 'config.json'
    configPath.write_text('{"seeding": {"nParticles": 25, "seed": 1}}')

    result = FluidSimRunner().runFromConfig(str(configPath), nSteps=2, showProgress=False)

    assert result['finalState'].step == 2


def testParserDefaults():
    args = buildParser().parse_args([])

    assert args.config is None
    assert args.steps == 2000
    assert args.particles is None
    assert not args.no_progress


def testMainWritesSnapshot(tmp_path):
    snapshotPath = tmp_path / 'frames' / 'final.html'

    main(['--steps', '3', '--particles', '20', '--seed', '4', '--no-progress',
          '--snapshot', str(snapshotPath)])

    assert snapshotPath.exists()
    assert snapshotPath.stat().st_size > 0


def testPlotParticlesScalesMarkers():
    '''One marker per particle, sized by radius, with the y axis flipped.'''
    views = [
        ParticleView(position=(100.0, 50.0), radius=8.0),
        ParticleView(position=(300.0, 500.0), radius=8.0),
    ]
    fig = plotParticles(views, domainWidth=400.0, domainHeight=600.0, plotWidth=800)

    trace = fig.data[0]
    np.testing.assert_allclose(trace.x, [100.0, 300.0])
    np.testing.assert_allclose(trace.y, [50.0, 500.0])
    np.testing.assert_allclose(trace.marker.size, [32.0, 32.0])
    assert tuple(fig.layout.yaxis.range) == (600.0, 0.0)
    assert fig.layout.height == 1200


def testPlotParticlesEmptyFrame():
    fig = plotParticles([], domainWidth=100.0, domainHeight=100.0)
    assert len(fig.data[0].x) == 0


def testSnapshotRendererKeepsLatestFrame():
    renderer = PlotlySnapshotRenderer(domainWidth=200.0, domainHeight=100.0)
    renderer.render([ParticleView(position=(1.0, 2.0), radius=1.0)])
    renderer.render([ParticleView(position=(3.0, 4.0), radius=1.0)])

    assert renderer.nFrames == 2
    np.testing.assert_allclose(renderer.figure.data[0].x, [3.0])
