"""
Tests for YAML configuration loading.
"""
import os
import shutil
import tempfile

import pytest

from qlab.config import Config, config


class TestConfig:
    """Test dot-notation access and file loading."""

    def test_default_config_loaded(self):
        assert config.get('training.max_steps') == 200
        assert config.get('training.progress_interval') == 10

    def test_load_from_file(self):
        temp_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(temp_dir, 'custom.yaml')
            with open(path, 'w') as f:
                f.write("training:\n  alpha: 0.25\n  seed: null\nexport:\n  enabled: false\n")
            custom = Config(path)
            assert custom.get('training.alpha') == 0.25
            assert custom.get('export.enabled') is False
        finally:
            shutil.rmtree(temp_dir)

    def test_missing_and_null_values_use_default(self):
        temp_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(temp_dir, 'custom.yaml')
            with open(path, 'w') as f:
                f.write("training:\n  seed: null\n")
            custom = Config(path)
            assert custom.get('training.seed', 5) == 5
            assert custom.get('training.gamma', 0.9) == 0.9
            assert custom.get('training.seed.deeper', 'x') == 'x'
        finally:
            shutil.rmtree(temp_dir)

    def test_empty_file(self):
        temp_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(temp_dir, 'empty.yaml')
            open(path, 'w').close()
            assert Config(path).to_dict() == {}
        finally:
            shutil.rmtree(temp_dir)

    def test_set_creates_sections(self):
        custom = Config(os.devnull)
        custom.set('export.directory', '/tmp/tables')
        assert custom.get('export.directory') == '/tmp/tables'
        assert custom.to_dict() == {'export': {'directory': '/tmp/tables'}}

    def test_section_builds_lab_environment(self):
        from environments.lab_env import LabEnvironment

        settings = config.section('environment')
        assert settings['lamp_lux'] == 150.0
        env = LabEnvironment(**settings)
        assert env.window_share == (0.5, 0.3)

    def test_section_drops_nulls_and_copies(self):
        temp_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(temp_dir, 'custom.yaml')
            with open(path, 'w') as f:
                f.write("environment:\n  lamp_lux: 90.0\n  seed: null\ntraining:\n  alpha: 0.3\n")
            custom = Config(path)
            settings = custom.section('environment')
            assert settings == {'lamp_lux': 90.0}
            settings['lamp_lux'] = 1.0
            assert custom.get('environment.lamp_lux') == 90.0
            assert custom.section('missing') == {}
            with pytest.raises(TypeError):
                custom.section('training.alpha')
        finally:
            shutil.rmtree(temp_dir)
