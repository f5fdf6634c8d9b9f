'''Tests for SimulationConfig defaults, validation, and JSON loading.'''

import json

import numpy as np
import pytest

from SphFluid.sph.protocols import SimulationConfig


def testDefaultsMatchDamBreakScene():
    '''Defaults reproduce the classic dam break constants.'''
    config = SimulationConfig()

    assert config.domainWidth == 800.0
    assert config.domainHeight == 600.0
    assert config.kernelRadius == 16.0
    assert config.restDensity == 300.0
    assert config.gasConstant == 2000.0
    assert config.viscosity == 200.0
    assert config.mass == 2.5
    assert config.timeStep == pytest.approx(0.0007)
    assert config.boundaryDamping == -0.5
    assert config.boundaryEpsilon == config.kernelRadius
    np.testing.assert_array_equal(config.gravity, [0.0, 10.0])


def testDerivedQuantities():
    config = SimulationConfig()

    assert config.gridShape == (50, 38)
    assert config.particleDrawRadius == 8.0
    np.testing.assert_array_equal(config.domainSize, [800.0, 600.0])
    assert SimulationConfig(drawRadius=3.0).particleDrawRadius == 3.0


@pytest.mark.parametrize('changes', [
    {'domainWidth': 0.0},
    {'domainHeight': -5.0},
    {'kernelRadius': 0.0},
    {'mass': 0.0},
    {'timeStep': -1e-4},
    {'nParticles': 0},
    {'boundaryDamping': 0.0},
    {'boundaryDamping': -1.0},
    {'boundaryDamping': 0.5},
    {'boundaryEpsilon': 0.0},
    {'boundaryEpsilon': 300.0},
    {'boundaryEpsilon': 1e-14},
    {'jitterAmplitude': -1.0},
    {'drawRadius': 0.0},
    {'gravity': np.array([0.0, 0.0, -9.81])},
])
def testInvalidValuesRaise(changes):
    '''Out-of-range parameters are rejected at construction.'''
    with pytest.raises(ValueError):
        SimulationConfig(**changes)


def testWallGapRoundingAwayIsRejected():
    '''An epsilon lost to rounding against the domain size would put the far wall outside the grid.'''
    assert 800.0 - 1e-14 == 800.0
    with pytest.raises(ValueError, match='far wall'):
        SimulationConfig(boundaryEpsilon=1e-14)


def testWithOverridesIgnoresNone():
    '''Unset overrides keep the loaded value; set ones replace it.'''
    config = SimulationConfig(nParticles=120, seed=1)
    updated = config.withOverrides(nParticles=None, seed=42)

    assert updated.nParticles == 120
    assert updated.seed == 42
    assert config.seed == 1


def testWithOverridesValidates():
    with pytest.raises(ValueError):
        SimulationConfig().withOverrides(nParticles=-3)


def testFromJsonReadsAllSections(tmp_path):
    '''Every section maps onto the matching fields.'''
    data = {
        'domain': {'width': 400.0, 'height': 320.0},
        'sph': {'kernelRadius': 8.0, 'timeStep': 0.001, 'boundaryDamping': -0.25, 'boundaryEpsilon': 4.0, 'drawRadius': 2.5},
        'fluid': {'restDensity': 100.0, 'gasConstant': 500.0, 'viscosity': 50.0, 'mass': 1.5, 'gravity': [0.0, -9.8]},
        'seeding': {'nParticles': 64, 'jitterAmplitude': 0.5, 'seed': 9},
    }
    configPath = tmp_path / 'config.json'
    configPath.write_text(json.dumps(data))

    config = SimulationConfig.fromJson(str(configPath))

    assert config.domainWidth == 400.0
    assert config.domainHeight == 320.0
    assert config.kernelRadius == 8.0
    assert config.timeStep == 0.001
    assert config.boundaryDamping == -0.25
    assert config.boundaryEpsilon == 4.0
    assert config.particleDrawRadius == 2.5
    assert config.restDensity == 100.0
    assert config.gasConstant == 500.0
    assert config.viscosity == 50.0
    assert config.mass == 1.5
    np.testing.assert_array_equal(config.gravity, [0.0, -9.8])
    assert config.nParticles == 64
    assert config.jitterAmplitude == 0.5
    assert config.seed == 9


def testFromJsonFallsBackToDefaults(tmp_path):
    '''Missing keys use defaults; the wall gap tracks the kernel radius.'''
    configPath = tmp_path / 'partial.json'
    configPath.write_text(json.dumps({'sph': {'kernelRadius': 20.0}}))

    config = SimulationConfig.fromJson(str(configPath))

    assert config.kernelRadius == 20.0
    assert config.boundaryEpsilon == 20.0
    assert config.domainWidth == 800.0
    assert config.seed is None


def testShippedConfigLoads():
    '''The default configuration file in configs/ is valid.'''
    from pathlib import Path

    configPath = Path(__file__).parent.parent / 'configs' / 'damBreak_default.json'
    config = SimulationConfig.fromJson(str(configPath))

    assert config.nParticles == 500
    assert config.seed == 7
