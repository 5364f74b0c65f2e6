# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the quartiles generator.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import os
import argparse
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Tuple

import yaml


# Default model for AI operations
DEFAULT_MODEL = "claude-sonnet-4-20250514"

# Requested word lengths per generation mode
MODE_LENGTHS = {
    "standard": (8, 12),
    "strict": (10, 14),
}
VALID_MODES = list(MODE_LENGTHS)
VALID_OUTPUT_FORMATS = ["yaml", "json"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class GenerationConfig:
    """Configuration for puzzle generation."""
    max_retries: int = 5
    min_word_length: int = 8
    max_word_length: int = 14


@dataclass
class OutputConfig:
    """Configuration for output."""
    directory: str = "./output"
    format: str = "yaml"
    stats_file: Optional[str] = None
    log_level: str = "INFO"
    log_file_prefix: str = "quartiles"
    enable_console_logging: bool = True


@dataclass
class AIConfig:
    """Configuration for AI integration."""
    model: Optional[str] = None
    prompt_config: str = "./prompts.yaml"
    api_key: Optional[str] = None
    api_key_env: str = "ANTHROPIC_API_KEY"
    model_env: str = "ANTHROPIC_MODEL"


@dataclass
class QuartilesConfig:
    """Complete configuration for puzzle generation."""
    theme: Optional[str] = None
    mode: str = "standard"
    daily: bool = False
    date: Optional[str] = None

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ai: AIConfig = field(default_factory=AIConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.generation, dict):
            self.generation = GenerationConfig(**self.generation)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)
        if isinstance(self.ai, dict):
            self.ai = AIConfig(**self.ai)

    def prompt_length_range(self) -> Tuple[int, int]:
        """Word lengths to ask the model for in the current mode."""
        return MODE_LENGTHS.get(self.mode, MODE_LENGTHS["standard"])

    @classmethod
    def from_yaml(cls, path: str) -> 'QuartilesConfig':
        """
        Load configuration from a YAML file.

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'QuartilesConfig':
        """Create QuartilesConfig from dictionary."""
        puzzle_data = data.get('puzzle', {}) or {}

        config = cls(
            theme=puzzle_data.get('theme'),
            mode=puzzle_data.get('mode', "standard"),
            daily=puzzle_data.get('daily', False),
            date=puzzle_data.get('date'),
        )

        if 'generation' in data:
            gen = data['generation'] or {}
            defaults = config.generation
            config.generation = GenerationConfig(
                max_retries=gen.get('max_retries', defaults.max_retries),
                min_word_length=gen.get('min_word_length', defaults.min_word_length),
                max_word_length=gen.get('max_word_length', defaults.max_word_length),
            )

        if 'output' in data:
            out = data['output'] or {}
            defaults = config.output
            config.output = OutputConfig(
                directory=out.get('directory', defaults.directory),
                format=out.get('format', defaults.format),
                stats_file=out.get('stats_file', defaults.stats_file),
                log_level=out.get('log_level', defaults.log_level),
                log_file_prefix=out.get('log_file_prefix', defaults.log_file_prefix),
                enable_console_logging=out.get(
                    'enable_console_logging', defaults.enable_console_logging
                ),
            )

        if 'ai' in data:
            ai_data = data['ai'] or {}
            defaults = config.ai
            config.ai = AIConfig(
                model=ai_data.get('model'),
                prompt_config=ai_data.get('prompt_config', defaults.prompt_config),
                api_key=ai_data.get('api_key'),
                api_key_env=ai_data.get('api_key_env', defaults.api_key_env),
                model_env=ai_data.get('model_env', defaults.model_env),
            )

        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'QuartilesConfig':
        """Create configuration from command-line arguments."""
        config = cls()

        if getattr(args, 'theme', None):
            config.theme = args.theme
        if getattr(args, 'mode', None):
            config.mode = args.mode
        if getattr(args, 'daily', False):
            config.daily = True
        if getattr(args, 'date', None):
            config.date = args.date
        if getattr(args, 'max_retries', None):
            config.generation.max_retries = args.max_retries
        if getattr(args, 'output', None):
            config.output.directory = args.output
        if getattr(args, 'format', None):
            config.output.format = args.format
        if getattr(args, 'stats_file', None):
            config.output.stats_file = args.stats_file
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"
        if getattr(args, 'prompt_config', None):
            config.ai.prompt_config = args.prompt_config
        if getattr(args, 'api_key', None):
            config.ai.api_key = args.api_key
        if getattr(args, 'model', None):
            config.ai.model = args.model

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'QuartilesConfig',
        cli_config: 'QuartilesConfig'
    ) -> 'QuartilesConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        Only CLI values that differ from the defaults override YAML.
        """
        merged = QuartilesConfig(
            theme=yaml_config.theme,
            mode=yaml_config.mode,
            daily=yaml_config.daily,
            date=yaml_config.date,
            generation=yaml_config.generation,
            output=yaml_config.output,
            ai=yaml_config.ai,
        )

        default = cls()

        if cli_config.theme:
            merged.theme = cli_config.theme
        if cli_config.mode != default.mode:
            merged.mode = cli_config.mode
        if cli_config.daily:
            merged.daily = True
        if cli_config.date:
            merged.date = cli_config.date
        if cli_config.generation.max_retries != default.generation.max_retries:
            merged.generation.max_retries = cli_config.generation.max_retries
        if cli_config.output.directory != default.output.directory:
            merged.output.directory = cli_config.output.directory
        if cli_config.output.format != default.output.format:
            merged.output.format = cli_config.output.format
        if cli_config.output.stats_file:
            merged.output.stats_file = cli_config.output.stats_file
        if cli_config.output.log_level != default.output.log_level:
            merged.output.log_level = cli_config.output.log_level
        if cli_config.ai.prompt_config != default.ai.prompt_config:
            merged.ai.prompt_config = cli_config.ai.prompt_config
        if cli_config.ai.api_key:
            merged.ai.api_key = cli_config.ai.api_key
        if cli_config.ai.model:
            merged.ai.model = cli_config.ai.model

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.theme is not None and not self.theme.strip():
            errors.append("Theme cannot be blank")

        if self.mode not in VALID_MODES:
            errors.append(f"Invalid mode '{self.mode}'. Must be one of: {VALID_MODES}")

        if self.generation.max_retries < 1:
            errors.append("max_retries must be at least 1")

        if self.generation.min_word_length < 8:
            errors.append("min_word_length must be at least 8 for 4-chunk words")

        if self.generation.max_word_length < self.generation.min_word_length:
            errors.append("max_word_length must not be less than min_word_length")

        if self.output.format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid output format '{self.output.format}'. "
                f"Must be one of: {VALID_OUTPUT_FORMATS}"
            )

        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'puzzle': {
                'theme': self.theme,
                'mode': self.mode,
                'daily': self.daily,
                'date': self.date,
            },
            'generation': asdict(self.generation),
            'output': asdict(self.output),
            'ai': asdict(self.ai),
        }


def discover_api_key(config: QuartilesConfig) -> Optional[str]:
    """
    Discover API key from multiple sources in priority order.

    Priority order:
    1. CLI argument or config file api_key field
    2. Environment variable (ANTHROPIC_API_KEY or custom)
    3. Anthropic config file (~/.anthropic/api_key)

    Returns:
        API key string or None if not found
    """
    if config.ai.api_key and config.ai.api_key != "null":
        return config.ai.api_key

    env_var = config.ai.api_key_env or "ANTHROPIC_API_KEY"
    if os.environ.get(env_var):
        return os.environ[env_var]

    anthropic_key_file = Path.home() / ".anthropic" / "api_key"
    if anthropic_key_file.exists():
        key = anthropic_key_file.read_text().strip()
        if key:
            return key

    return None


def get_model(config: QuartilesConfig) -> str:
    """
    Get AI model from config with fallback chain.

    Priority order:
    1. Config ai.model field (from CLI or config file)
    2. Environment variable (ANTHROPIC_MODEL or custom)
    3. Default model
    """
    if config.ai.model and config.ai.model != "null":
        return config.ai.model

    env_var = config.ai.model_env or "ANTHROPIC_MODEL"
    if os.environ.get(env_var):
        return os.environ[env_var]

    return DEFAULT_MODEL


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate AI-themed quartiles word puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random theme
  quartiles

  # Specific theme in strict mode
  quartiles --theme "Space" --mode strict

  # Today's daily puzzle as JSON
  quartiles --daily --format json

  # CLI arguments override YAML
  quartiles --config quartiles.yaml --theme "Override"
"""
    )

    parser.add_argument("--config", "-c", metavar="PATH", help="YAML configuration file")

    parser.add_argument("--theme", "-t", metavar="TEXT", help="Puzzle theme")
    parser.add_argument(
        "--mode", choices=VALID_MODES,
        help="Word length mode: standard (8-12) or strict (10-14)"
    )
    parser.add_argument("--daily", action="store_true", help="Generate the daily puzzle")
    parser.add_argument("--date", metavar="YYYY-MM-DD", help="Date for the daily puzzle")
    parser.add_argument(
        "--max-retries", type=int, metavar="INT",
        help="Generation attempts before using the fallback words (default: 5)"
    )

    parser.add_argument("--output", "-o", metavar="PATH", help="Output directory")
    parser.add_argument("--format", choices=VALID_OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--stats-file", metavar="PATH", help="Player stats YAML file")

    parser.add_argument("--prompt-config", metavar="PATH", help="Path to prompts.yaml file")
    parser.add_argument("--api-key", metavar="KEY", help="Anthropic API key")
    parser.add_argument("--model", metavar="MODEL", help="AI model to use")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--dry-run", action="store_true", help="Validate config without generating")

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> QuartilesConfig:
    """
    Load configuration from command-line and/or YAML file.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = QuartilesConfig.from_yaml(args.config)

    cli_config = QuartilesConfig.from_args(args)

    if yaml_config:
        config = QuartilesConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
