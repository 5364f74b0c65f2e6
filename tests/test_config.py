# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for config module."""

import os
import sys
import tempfile
import unittest
from unittest.mock import patch

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import (
    QuartilesConfig, GenerationConfig, OutputConfig, AIConfig,
    ConfigValidationError, DEFAULT_MODEL, VALID_MODES, VALID_OUTPUT_FORMATS,
    create_argument_parser, discover_api_key, get_model, load_config
)


class TestQuartilesConfig(unittest.TestCase):
    """Tests for QuartilesConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = QuartilesConfig()

        self.assertIsNone(config.theme)
        self.assertEqual(config.mode, "standard")
        self.assertFalse(config.daily)
        self.assertEqual(config.generation.max_retries, 5)
        self.assertEqual(config.output.format, "yaml")
        self.assertEqual(config.prompt_length_range(), (8, 12))

    def test_strict_mode_lengths(self):
        """Test strict mode asks for longer words."""
        config = QuartilesConfig(mode="strict")
        self.assertEqual(config.prompt_length_range(), (10, 14))

    def test_nested_config_from_dict(self):
        """Test creating config with nested dict values."""
        config = QuartilesConfig(
            theme="Test",
            generation={'max_retries': 3},
            output={'directory': './test_output'}
        )

        self.assertIsInstance(config.generation, GenerationConfig)
        self.assertEqual(config.generation.max_retries, 3)
        self.assertEqual(config.output.directory, './test_output')

    def test_validation_valid_config(self):
        """Test validation of valid configuration."""
        for mode in VALID_MODES:
            self.assertEqual(QuartilesConfig(theme="Space", mode=mode).validate(), [])

    def test_validation_errors(self):
        """Test validation catches invalid values."""
        cases = [
            QuartilesConfig(theme="   "),
            QuartilesConfig(mode="easy"),
            QuartilesConfig(generation=GenerationConfig(max_retries=0)),
            QuartilesConfig(generation=GenerationConfig(min_word_length=6)),
            QuartilesConfig(generation=GenerationConfig(min_word_length=12, max_word_length=10)),
            QuartilesConfig(output=OutputConfig(format="xml")),
            QuartilesConfig(output=OutputConfig(log_level="LOUD")),
        ]
        for config in cases:
            self.assertEqual(len(config.validate()), 1, config)

    def test_to_dict(self):
        """Test conversion to dictionary."""
        data = QuartilesConfig(theme="Ocean").to_dict()
        self.assertEqual(data['puzzle']['theme'], "Ocean")
        self.assertEqual(data['generation']['max_retries'], 5)
        self.assertIn('prompt_config', data['ai'])


class TestConfigYAML(unittest.TestCase):
    """Tests for YAML loading."""

    def write(self, tmpdir, content):
        path = os.path.join(tmpdir, "config.yaml")
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_from_yaml(self):
        """Test loading configuration from YAML."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self.write(tmpdir, """
puzzle:
  theme: Ocean
  mode: strict
generation:
  max_retries: 3
output:
  directory: ./puzzles
  format: json
ai:
  model: claude-test
""")
            config = QuartilesConfig.from_yaml(path)

        self.assertEqual(config.theme, "Ocean")
        self.assertEqual(config.mode, "strict")
        self.assertEqual(config.generation.max_retries, 3)
        self.assertEqual(config.generation.min_word_length, 8)
        self.assertEqual(config.output.directory, "./puzzles")
        self.assertEqual(config.output.format, "json")
        self.assertEqual(config.ai.model, "claude-test")
        self.assertEqual(config.ai.prompt_config, "./prompts.yaml")

    def test_missing_file(self):
        """Test a missing file raises ConfigValidationError."""
        with self.assertRaises(ConfigValidationError):
            QuartilesConfig.from_yaml("/nonexistent/config.yaml")

    def test_invalid_yaml(self):
        """Test invalid YAML and non-mapping documents are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            for content in ["puzzle: [", "- a\n- b\n"]:
                path = self.write(tmpdir, content)
                with self.assertRaises(ConfigValidationError):
                    QuartilesConfig.from_yaml(path)


class TestArgsAndMerge(unittest.TestCase):
    """Tests for CLI parsing and merging."""

    def setUp(self):
        self.parser = create_argument_parser()

    def test_from_args(self):
        """Test CLI flags map onto config fields."""
        args = self.parser.parse_args([
            "--theme", "Space", "--mode", "strict", "--daily", "--date", "2026-01-02",
            "--max-retries", "2", "--output", "out", "--format", "json", "--verbose",
        ])
        config = QuartilesConfig.from_args(args)

        self.assertEqual(config.theme, "Space")
        self.assertEqual(config.mode, "strict")
        self.assertTrue(config.daily)
        self.assertEqual(config.date, "2026-01-02")
        self.assertEqual(config.generation.max_retries, 2)
        self.assertEqual(config.output.directory, "out")
        self.assertEqual(config.output.format, "json")
        self.assertEqual(config.output.log_level, "DEBUG")

    def test_invalid_choice(self):
        """Test argparse rejects unknown modes and formats."""
        with self.assertRaises(SystemExit):
            self.parser.parse_args(["--format", "xml"])
        self.assertIn("json", VALID_OUTPUT_FORMATS)

    def test_cli_overrides_yaml(self):
        """Test CLI values take precedence over YAML values."""
        yaml_config = QuartilesConfig(
            theme="Ocean",
            generation=GenerationConfig(max_retries=3),
            output=OutputConfig(format="json"),
        )
        cli_config = QuartilesConfig(theme="Space")

        merged = QuartilesConfig.merge(yaml_config, cli_config)

        self.assertEqual(merged.theme, "Space")
        self.assertEqual(merged.generation.max_retries, 3)
        self.assertEqual(merged.output.format, "json")

    def test_load_config_with_file(self):
        """Test load_config merges file and flags, then validates."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "config.yaml")
            with open(path, 'w') as f:
                f.write("puzzle:\n  theme: Ocean\noutput:\n  format: json\n")

            args = self.parser.parse_args(["--config", path, "--daily"])
            config = load_config(args)

        self.assertEqual(config.theme, "Ocean")
        self.assertTrue(config.daily)
        self.assertEqual(config.output.format, "json")

    def test_load_config_invalid(self):
        """Test load_config raises on invalid values."""
        args = self.parser.parse_args(["--theme", "   "])
        with self.assertRaises(ConfigValidationError):
            load_config(args)


class TestDiscovery(unittest.TestCase):
    """Tests for API key and model discovery."""

    def test_api_key_from_config(self):
        """Test an explicit key wins."""
        config = QuartilesConfig(ai=AIConfig(api_key="sk-config"))
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-env"}):
            self.assertEqual(discover_api_key(config), "sk-config")

    def test_api_key_from_env(self):
        """Test the environment variable is used next."""
        config = QuartilesConfig(ai=AIConfig(api_key_env="QUARTILES_KEY"))
        with patch.dict(os.environ, {"QUARTILES_KEY": "sk-env"}):
            self.assertEqual(discover_api_key(config), "sk-env")

    def test_model_chain(self):
        """Test model discovery order."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_model(QuartilesConfig()), DEFAULT_MODEL)
            config = QuartilesConfig(ai=AIConfig(model="claude-test"))
            self.assertEqual(get_model(config), "claude-test")
        with patch.dict(os.environ, {"ANTHROPIC_MODEL": "claude-env"}, clear=True):
            self.assertEqual(get_model(QuartilesConfig()), "claude-env")


if __name__ == '__main__':
    unittest.main()
