# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Prompt loader module for the quartiles generator.

Loads AI prompt templates from external YAML configuration,
supporting variable substitution and validation.
"""

import re
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Optional, Any, List, Tuple

import yaml


class PromptSchemaError(Exception):
    """Raised when prompt configuration schema is invalid."""
    pass


class PromptRenderError(Exception):
    """Raised when prompt variable substitution fails."""
    pass


@dataclass
class PromptTemplate:
    """
    A single prompt template with configuration.

    Attributes:
        name: Display name for the prompt
        description: What this prompt does
        system: System prompt template
        user: User prompt template
        model: Optional model override for this prompt
        temperature: Temperature setting for this prompt
        max_tokens: Maximum tokens for response
    """
    name: str
    description: str
    system: str
    user: str
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 1024

    VARIABLE_PATTERN = re.compile(r'\{\{(\w+)\}\}')

    def render(self, **variables) -> Tuple[str, str]:
        """
        Render the prompt with variable substitution.

        Args:
            **variables: Variables to substitute into the template

        Returns:
            Tuple of (system_prompt, user_prompt)

        Raises:
            PromptRenderError: If required variables are missing
        """
        system_rendered = self._substitute(self.system, variables, 'system')
        user_rendered = self._substitute(self.user, variables, 'user')
        return system_rendered, user_rendered

    def _substitute(
        self,
        template: str,
        variables: Dict[str, Any],
        prompt_type: str
    ) -> str:
        required_vars = set(self.VARIABLE_PATTERN.findall(template))

        missing = required_vars - set(variables.keys())
        if missing:
            raise PromptRenderError(
                f"Missing required variables for {prompt_type} prompt: {missing}"
            )

        result = template
        for var_name in required_vars:
            value = variables[var_name]
            if isinstance(value, list):
                value = '\n'.join(f'- {item}' for item in value)
            elif not isinstance(value, str):
                value = str(value)
            result = result.replace(f'{{{{{var_name}}}}}', value)

        return result

    def get_variables(self) -> Tuple[set, set]:
        """Get (system_vars, user_vars) used by this prompt."""
        system_vars = set(self.VARIABLE_PATTERN.findall(self.system))
        user_vars = set(self.VARIABLE_PATTERN.findall(self.user))
        return system_vars, user_vars


class PromptLoader:
    """
    Loads and manages prompt templates from YAML configuration.

    Usage:
        loader = PromptLoader('prompts.yaml')
        template = loader.get('theme_words')
        system, user = template.render(theme='Space', word_count=5, ...)
    """

    def __init__(self, config_path: str):
        """
        Initialize the prompt loader.

        Args:
            config_path: Path to prompts.yaml configuration file

        Raises:
            PromptSchemaError: If configuration is invalid
        """
        self.config_path = Path(config_path)
        self.prompts: Dict[str, PromptTemplate] = {}
        self.version: str = "1.0"
        self._default_model: Optional[str] = None
        self._default_temperature: float = 0.7
        self._default_max_tokens: int = 1024

        self._load()

    @classmethod
    def from_string(cls, content: str) -> 'PromptLoader':
        """Build a loader from YAML text instead of a file."""
        loader = cls.__new__(cls)
        loader.config_path = Path("<string>")
        loader.prompts = {}
        loader.version = "1.0"
        loader._default_model = None
        loader._default_temperature = 0.7
        loader._default_max_tokens = 1024
        loader._load_data(loader._parse(content))
        return loader

    def _load(self):
        if not self.config_path.exists():
            raise PromptSchemaError(
                f"Prompt configuration file not found: {self.config_path}"
            )
        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._load_data(self._parse(f.read()))

    @staticmethod
    def _parse(content: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise PromptSchemaError(f"Invalid YAML in prompts config: {e}")
        if not isinstance(data, dict):
            raise PromptSchemaError("Prompts configuration must be a mapping")
        return data

    def _load_data(self, data: Dict[str, Any]):
        self.version = str(data.get('version', '1.0'))

        defaults = data.get('model_defaults') or {}
        self._default_model = defaults.get('model')
        self._default_temperature = defaults.get('temperature', 0.7)
        self._default_max_tokens = defaults.get('max_tokens', 1024)

        if 'prompts' not in data or not isinstance(data['prompts'], dict):
            raise PromptSchemaError("Missing 'prompts' section in configuration")

        for prompt_name, prompt_data in data['prompts'].items():
            self._load_prompt(prompt_name, prompt_data)

    def _load_prompt(self, name: str, data: Dict[str, Any]):
        for field_name in ('name', 'system', 'user'):
            if field_name not in data:
                raise PromptSchemaError(
                    f"Missing required field '{field_name}' in prompt '{name}'"
                )

        self.prompts[name] = PromptTemplate(
            name=data['name'],
            description=data.get('description', ''),
            system=data['system'],
            user=data['user'],
            model=data.get('model', self._default_model),
            temperature=data.get('temperature', self._default_temperature),
            max_tokens=data.get('max_tokens', self._default_max_tokens),
        )

    def get(self, prompt_name: str) -> PromptTemplate:
        """
        Get a prompt template by name.

        Raises:
            KeyError: If prompt not found
        """
        if prompt_name not in self.prompts:
            raise KeyError(
                f"Unknown prompt '{prompt_name}'. "
                f"Available prompts: {list(self.prompts.keys())}"
            )
        return self.prompts[prompt_name]

    def list_prompts(self) -> List[str]:
        return list(self.prompts.keys())


def create_default_prompts_yaml() -> str:
    """
    Create default prompts.yaml content.

    Returns:
        YAML string with default prompts configuration
    """
    return '''# AI Prompt Configuration for the Quartiles Generator
# Variables in {{double_braces}} are substituted at runtime

version: "1.0"

model_defaults:
  model: null                    # Use main config default if null
  temperature: 0.7
  max_tokens: 1024

prompts:
  theme_words:
    name: "Generate Theme Words"
    description: "Five long theme words to be split into quartile tiles"

    temperature: 0.7
    max_tokens: 1024

    system: |
      You are a word game assistant. Generate exactly {{word_count}} themed
      words, each {{min_length}}-{{max_length}} letters long, split into 4
      meaningful chunks. Return only a JSON object, no other text.

    user: |
      Theme: "{{theme}}"
      Format your response exactly like this, with {{word_count}} words:
      {
        "theme": "{{theme}}",
        "words": [
          {"word": "QUARTERBACK", "chunks": ["QUAR", "TER", "BA", "CK"]}
        ]
      }

      Requirements:
      - Each word MUST be {{min_length}}-{{max_length}} letters (count carefully)
      - Each word must be split into exactly 4 chunks of at least 2 letters
      - Words must be single words related to the theme, no spaces or hyphens
      - Return only the JSON, no other text
'''
