"""Tests for config module."""

import pytest
import yaml
from houghcircles.config import DEFAULT_CONFIG, load_config, merge_config, validate_config
from houghcircles.errors import HoughConfigurationError


class TestConfig:
    """Test configuration module."""
    
    def test_default_config_exists(self):
        """Test that default config exists."""
        assert DEFAULT_CONFIG is not None
        assert isinstance(DEFAULT_CONFIG, dict)
    
    def test_hough_config(self):
        """Test detector configuration."""
        assert 'hough' in DEFAULT_CONFIG
        hough = DEFAULT_CONFIG['hough']
        
        for key in ('minimum_radius', 'maximum_radius', 'threshold', 'sigma_gradient',
                    'sweep_angle', 'variance', 'number_of_circles', 'disc_radius_ratio'):
            assert key in hough
    
    def test_config_values_valid(self):
        """Test that config values are sensible."""
        hough = DEFAULT_CONFIG['hough']
        assert hough['minimum_radius'] <= hough['maximum_radius']
        assert hough['number_of_circles'] >= 1
        assert hough['variance'] > 0
        assert len(DEFAULT_CONFIG['io']['spacing']) == 2
    
    def test_load_default(self):
        """Test loading without a file returns a copy of the defaults."""
        config = load_config()
        assert config == DEFAULT_CONFIG
        config['hough']['threshold'] = 99
        assert DEFAULT_CONFIG['hough']['threshold'] == 0
    
    def test_load_yaml(self, tmp_path):
        """Test YAML values override defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"hough": {"maximum_radius": 40, "threshold": 12.5}}))
        
        config = load_config(path)
        assert config['hough']['maximum_radius'] == 40
        assert config['hough']['threshold'] == 12.5
        assert config['hough']['variance'] == DEFAULT_CONFIG['hough']['variance']
    
    def test_load_invalid_yaml(self, tmp_path):
        """Test invalid values in a file are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("hough:\n  minimum_radius: 50\n  maximum_radius: 5\n")
        with pytest.raises(HoughConfigurationError):
            load_config(path)
    
    def test_load_non_mapping(self, tmp_path):
        """Test a file that is not a mapping is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(HoughConfigurationError):
            load_config(path)
    
    def test_unknown_option(self):
        """Test misspelled options are rejected."""
        with pytest.raises(HoughConfigurationError):
            validate_config({"hough": {"max_radius": 3}})
    
    def test_negative_option(self):
        """Test negative scales are rejected."""
        with pytest.raises(HoughConfigurationError):
            validate_config({"hough": {"sweep_angle": -0.1}})
        with pytest.raises(HoughConfigurationError):
            validate_config({"hough": {"workers": 0}})
    
    def test_merge_is_deep(self):
        """Test nested sections merge instead of being replaced."""
        merged = merge_config(DEFAULT_CONFIG, {"io": {"spacing": [0.5, 0.5]}})
        assert merged['io']['spacing'] == [0.5, 0.5]
        assert merged['io']['output_dir'] == DEFAULT_CONFIG['io']['output_dir']
        assert DEFAULT_CONFIG['io']['spacing'] == [1.0, 1.0]
